# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import User
from .users.exceptions import InvalidCredentialsError, UserAlreadyExistsError

__all__ = ["InvalidCredentialsError", "User", "UserAlreadyExistsError"]
