import os


class Settings:
    # Local SQLite file unless DATABASE_PATH points elsewhere
    DEFAULT_DATABASE_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "../data/chatbot.db"))

    def __init__(self):
        self._database_path = os.environ.get("DATABASE_PATH", self.DEFAULT_DATABASE_PATH)
        self._host = os.environ.get("HOST", "0.0.0.0")
        self._port = int(os.environ.get("PORT", "3001"))
        self._cors_origins = [
            o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        self._log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        self._response_table_path = os.environ.get("RESPONSE_TABLE_PATH") or None
        self._chat_api_url = os.environ.get("CHAT_API_URL", f"http://localhost:{self._port}/api").rstrip("/")
        self._ui_port = int(os.environ.get("UI_PORT", "7860"))

    def get_database_path(self) -> str:
        return self._database_path

    def get_database_url(self) -> str:
        """Returns the SQLAlchemy URL for the conversation store."""
        return f"sqlite:///{self._database_path}"

    def get_host(self) -> str:
        return self._host

    def get_port(self) -> int:
        return self._port

    def get_cors_origins(self) -> list[str]:
        return self._cors_origins

    def get_log_level(self) -> str:
        return self._log_level

    def get_response_table_path(self) -> str | None:
        """Optional JSON file replacing the built-in response table."""
        return self._response_table_path

    def get_chat_api_url(self) -> str:
        """Base URL the UI uses to reach the chat API (e.g. 'http://localhost:3001/api')."""
        return self._chat_api_url

    def get_ui_port(self) -> int:
        return self._ui_port


settings = Settings()
