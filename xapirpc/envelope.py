"""Unpack the {"Value": ...} / {"ErrorDescription": ...} envelope xapi replies with"""
from xapirpc.bridge import as_json
from xapirpc.errors import MalformedResponse, RpcFault, TypeMismatch
from xapirpc.wire import Str, Struct


def get_value(envelope):
    """Return the payload of a successful response.

    Raises RpcFault when the response carries an ErrorDescription and
    MalformedResponse when it carries neither member.
    """
    if isinstance(envelope, Struct):
        if "Value" in envelope:
            return envelope["Value"]
        if "ErrorDescription" in envelope:
            raise RpcFault(as_json(envelope["ErrorDescription"]))
    raise MalformedResponse(envelope)


def extract_session(envelope):
    """Return the session reference from a login response"""
    value = get_value(envelope)
    if not isinstance(value, Str):
        raise TypeMismatch("string", value)
    return value.value
