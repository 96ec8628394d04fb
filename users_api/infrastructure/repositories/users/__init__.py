from .sqlalchemy_user_repository import SqlAlchemyAccessTokenRepository, SqlAlchemyUserRepository

__all__ = ["SqlAlchemyAccessTokenRepository", "SqlAlchemyUserRepository"]
