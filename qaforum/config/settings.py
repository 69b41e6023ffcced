from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://127.0.0.1:27017"
    DB_NAME: str = "fake_so"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CLIENT_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    BCRYPT_ROUNDS: int = 12

    class Config:
        env_file = ".env"

settings = Settings()
