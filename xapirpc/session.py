"""An authenticated xapi session"""
import enum

from xapirpc import logger
from xapirpc.bridge import as_json
from xapirpc.envelope import extract_session, get_value
from xapirpc.errors import SessionClosed
from xapirpc.wire import Str

LOGIN_METHOD = "session.login_with_password"
LOGOUT_METHOD = "session.logout"


class SessionState(enum.Enum):
    """Lifetime of an RpcSession"""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    CLOSED = "closed"


class RpcSession:
    """A logged in session on a xapi endpoint.

    Logging in happens in the constructor: when it fails the exception
    propagates and no session exists. Use the session as a context manager,
    or call close() on every exit path, so that it is logged out exactly once:

    with RpcSession("https://host", "root", "secret", XmlRpcTransport()) as s:
        s.call("VM", "get_all")
    """

    def __init__(self, endpoint, user, password, transport):
        self.state = SessionState.UNAUTHENTICATED
        self.endpoint = endpoint
        self._transport = transport
        logger.debug("Logging in to %s as %s", endpoint, user)
        response = transport.invoke(LOGIN_METHOD, [Str(user), Str(password)], endpoint)
        self._token = extract_session(response)
        self.state = SessionState.AUTHENTICATED

    @property
    def token(self):
        """The opaque session reference handed out by the login"""
        return self._token

    def request(self, cls, method, args=()):
        """Call cls.method with the session prepended to args; return the wire value"""
        if self.state is not SessionState.AUTHENTICATED:
            raise SessionClosed(self.endpoint)
        name = "%s.%s" % (cls, method)
        logger.debug("Calling %s with %d argument(s)", name, len(args))
        response = self._transport.invoke(name, [Str(self._token)] + list(args),
                                          self.endpoint)
        return get_value(response)

    def call(self, cls, method, args=()):
        """Call cls.method and return the result as a JSON value"""
        return as_json(self.request(cls, method, args))

    def close(self):
        """Log out and release the transport; failures are only logged"""
        if self.state is SessionState.CLOSED:
            return
        self.state = SessionState.CLOSED
        try:
            self._transport.invoke(LOGOUT_METHOD, [Str(self._token)], self.endpoint)
        except Exception as exn:  # pylint: disable=broad-except
            logger.debug("Ignoring failed logout from %s: %s", self.endpoint, exn)
        try:
            self._transport.close()
        except Exception as exn:  # pylint: disable=broad-except
            logger.debug("Ignoring failed transport close: %s", exn)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __repr__(self):
        return "<RpcSession %s %s>" % (self.endpoint, self.state.value)
