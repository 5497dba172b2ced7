# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base_controller import BaseController
from .home_controller import HomeController
from .login_controller import LoginController
from .mypage_controller import MypageController

__all__ = ["BaseController", "HomeController", "LoginController", "MypageController"]
