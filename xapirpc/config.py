"""
Resolve the host and credentials to use.

Each setting is taken from the first place that has it: the command line,
the environment (XAPI_HOST, XAPI_USER, XAPI_PASSWORD), the preferences file
and finally the built-in default.
"""
import json
import os

from xapirpc import logger

APP_NAME = "xapirpc"
PREFERENCES_FILE = "config.prefs.json"

DEFAULT_HOST = "http://127.0.0.1"
DEFAULT_USER = "guest"
DEFAULT_PASS = "guest"

ENV_HOST = "XAPI_HOST"
ENV_USER = "XAPI_USER"
ENV_PASS = "XAPI_PASSWORD"


def as_url(host):
    """Prefix host with https:// unless it already names http or https"""
    if host.startswith("https:") or host.startswith("http:"):
        return host
    return "https://" + host


def preferences_path(environ=None):
    """Return the path of the preferences file"""
    if environ is None:
        environ = os.environ
    config_home = environ.get("XDG_CONFIG_HOME") or os.path.join(
        os.path.expanduser("~"), ".config")
    return os.path.join(config_home, APP_NAME, PREFERENCES_FILE)


def load_preferences(path=None):
    """Read the preferences file as a dictionary of string settings.

    A missing file means no preferences. A file that cannot be read or
    is not a JSON object is reported and ignored.
    """
    if path is None:
        path = preferences_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exn:
        logger.warning("Ignoring preferences file %s: %s", path, exn)
        return {}
    if not isinstance(content, dict):
        logger.warning("Ignoring preferences file %s: not a JSON object", path)
        return {}
    return {key: value for key, value in content.items() if isinstance(value, str)}


def _first(*candidates):
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None


class Config:
    """Resolved settings for one invocation"""

    def __init__(self, host, user, password, compact=False, ignore_ssl=False):
        self.host = host
        self.user = user
        self.password = password
        self.compact = compact
        self.ignore_ssl = ignore_ssl

    def __repr__(self):
        return "Config(host=%r, user=%r, compact=%r, ignore_ssl=%r)" % (
            self.host, self.user, self.compact, self.ignore_ssl)

    @classmethod
    def resolve(cls, host=None, user=None, password=None, compact=False,
                ignore_ssl=False, environ=None, preferences=None):
        """Build a Config, filling in what the caller left as None"""
        if environ is None:
            environ = os.environ
        if preferences is None:
            preferences = load_preferences(preferences_path(environ))

        host = _first(host, environ.get(ENV_HOST), preferences.get("host"), DEFAULT_HOST)
        user = _first(user, environ.get(ENV_USER), preferences.get("user"), DEFAULT_USER)
        password = _first(password, environ.get(ENV_PASS), preferences.get("pass"),
                          DEFAULT_PASS)
        logger.debug("Using host %s as user %s", host, user)
        return cls(as_url(host), user, password, compact, ignore_ssl)
