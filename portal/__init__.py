"""Small MVC login site: front-controller routing, server-side sessions, CSRF and validation."""
