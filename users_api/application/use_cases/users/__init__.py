from .login_user import LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .register_user import RegisterUserUseCase
from .show_user import ShowUserUseCase
from .update_user import UpdateUserUseCase

__all__ = [
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "ShowUserUseCase",
    "UpdateUserUseCase",
]
