import os
import yaml
from dotenv import load_dotenv

CONFIG_ENV_VAR = "GITHUB_PROJECTS_MCP_CONFIG"

DEFAULTS = {
    "github_api_url": "https://api.github.com",
    "api_version": "2022-11-28",
    "request_timeout": 30.0,
    "token_env": "GITHUB_PERSONAL_ACCESS_TOKEN",
    "log_level": "INFO",
    "logs_dir": None,
}


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        """
        Load the configuration into the class variable _config.

        The YAML file defaults to config.yaml at the project root and can be
        redirected with the GITHUB_PROJECTS_MCP_CONFIG environment variable.
        Keys missing from the file fall back to DEFAULTS.
        """
        load_dotenv()
        config_path = os.environ.get(CONFIG_ENV_VAR) or os.path.join(os.path.dirname(__file__), "..", "config.yaml")
        config_path = os.path.abspath(config_path)
        loaded = {}
        if os.path.isfile(config_path):
            with open(config_path, "r") as f:
                loaded = yaml.safe_load(f) or {}
        cls._config = {**DEFAULTS, **loaded}

    @classmethod
    def reset(cls):
        """Forget the cached configuration so the next access reloads it."""
        cls._instance = None
        cls._config = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()


def get_token():
    """Return the GitHub token from the environment variable named by `token_env`."""
    return os.environ.get(get_config()["token_env"], "")
