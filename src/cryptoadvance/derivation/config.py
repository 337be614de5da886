""" A config module contains static configuration """
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Config

# Loading env-vars from a .env in the current working directory
env_path = Path(".") / ".env"
load_dotenv(env_path)


def _get_bool_env_var(varname, default=None):

    value = os.environ.get(varname, default)

    if value is None:
        return False
    elif isinstance(value, str) and value.lower() == "false":
        return False
    elif bool(value) is False:
        return False
    else:
        return bool(value)


DEFAULT_CONFIG = "cryptoadvance.derivation.config.ProductionConfig"


class BaseConfig(object):
    # The network keys get retargeted to. One of main, test, regtest, signet, dogecoin
    DERIVATION_NETWORK = os.getenv("DERIVATION_NETWORK", "main")

    # Logging
    LOGFORMAT = os.getenv(
        "LOGFORMAT", "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
    )
    LOGLEVEL = os.getenv("LOGLEVEL", "INFO")
    # Collapses identical consecutive log-records into one "repeated n times" line
    LOG_DEDUPLICATE = _get_bool_env_var("LOG_DEDUPLICATE", "True")


class DevelopmentConfig(BaseConfig):
    DERIVATION_NETWORK = os.getenv("DERIVATION_NETWORK", "regtest")
    LOGLEVEL = os.getenv("LOGLEVEL", "DEBUG")


class TestConfig(BaseConfig):
    DERIVATION_NETWORK = "test"
    LOGLEVEL = "DEBUG"
    LOG_DEDUPLICATE = False


class ProductionConfig(BaseConfig):
    pass


def load_config(config_name=None):
    """Returns a Config (a dict) populated from one of the classes above.
    config_name can be the fully qualified name or just the classname.
    """
    if config_name is None:
        config_name = os.getenv("DERIVATION_CONFIG", DEFAULT_CONFIG)
    if "." not in config_name:
        config_name = f"cryptoadvance.derivation.config.{config_name}"
    config = Config(".")
    config.from_object(config_name)
    return config


def get_loglevel(config):
    level = config.get("LOGLEVEL", "INFO")
    if isinstance(level, int):
        return level
    return logging.getLevelName(level.upper())
