"""Exceptions raised by the xapirpc client"""
import json


class XapiRpcError(Exception):
    """Base class of every error the client reports"""


class TransportError(XapiRpcError):
    """The XML-RPC exchange with the endpoint failed"""
    def __init__(self, endpoint, reason):
        super().__init__("Transport error talking to {}: {}".format(endpoint, reason))
        self.endpoint = endpoint
        self.reason = reason


class RpcFault(XapiRpcError):
    """The endpoint answered with an ErrorDescription"""
    def __init__(self, description):
        rendered = json.dumps(description, separators=(",", ":"), ensure_ascii=False)
        super().__init__("XML Rpc error: " + rendered)
        self.description = description

    @property
    def code(self):
        """The xapi error code, e.g. SESSION_AUTHENTICATION_FAILED, if present"""
        if (isinstance(self.description, list) and self.description
                and isinstance(self.description[0], str)):
            return self.description[0]
        return None


class MalformedResponse(XapiRpcError):
    """The response envelope has neither a Value nor an ErrorDescription"""
    def __init__(self, raw):
        super().__init__("Unknown error: {!r}".format(raw))
        self.raw = raw


class TypeMismatch(XapiRpcError):
    """A value does not have the expected wire type"""
    def __init__(self, expected, actual):
        super().__init__("Mismatched type: expected {}, got {!r}".format(expected, actual))
        self.expected = expected
        self.actual = actual


class SessionClosed(XapiRpcError, RuntimeError):
    """A call was attempted on a session that has been logged out"""
    def __init__(self, endpoint):
        super().__init__("Session on {} is closed".format(endpoint))
        self.endpoint = endpoint
