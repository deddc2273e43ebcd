import json
import os
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"


class IdsConfig:
    __slots__ = ("max_batch",)

    def __init__(self, max_batch=100):
        self.max_batch = max_batch


class ServerConfig:
    __slots__ = ("host", "port")

    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "file", "crash_file")

    def __init__(self, level="INFO", file="logs/issued.log", crash_file="logs/crash.log"):
        self.level = level
        self.file = file
        self.crash_file = crash_file


class AuthConfig:
    __slots__ = ("username", "password")

    def __init__(self, username=None, password=None):
        self.username = username or os.environ.get("API_USERNAME", "admin")
        self.password = password or os.environ.get("API_PASSWORD", "admin123")


class Config:
    __slots__ = ("ids", "server", "logging", "auth")

    def __init__(self, ids=None, server=None, logging=None, auth=None):
        self.ids = ids or IdsConfig()
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()
        self.auth = auth or AuthConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            IdsConfig(**d.get("ids", {})),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
            AuthConfig(**d.get("auth", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))
