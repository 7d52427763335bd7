"""
XML-RPC transport for xapi endpoints.

Requests are marshalled from wire values with the standard library's
xmlrpc.client machinery, extended to emit <i8> for Int64 values, and the
responses are mapped back onto wire values.
"""
import datetime
import http.client as httplib
import re
import ssl
import urllib.parse
import xmlrpc.client as xmlrpclib
from xml.parsers.expat import ExpatError

from xapirpc import __version__, logger
from xapirpc.errors import TransportError, TypeMismatch
from xapirpc.wire import (INT32_MAX, INT32_MIN, Array, Bool, Bytes, DateTime,
                          Double, Int32, Int64, Nil, Str, Struct)

USER_AGENT = "xapirpc/%s" % __version__

_DATETIME = re.compile(r"(\d{4})-?(\d{2})-?(\d{2})T(\d{2}):?(\d{2}):?(\d{2})")


class _I8(int):
    """An int the marshaller writes as <i8> rather than <int>"""


class _Marshaller(xmlrpclib.Marshaller):
    dispatch = dict(xmlrpclib.Marshaller.dispatch)

    def dump_i8(self, value, write):
        write("<value><i8>")
        write(str(int(value)))
        write("</i8></value>\n")
    dispatch[_I8] = dump_i8


_TO_XMLRPC = {
    Int32: lambda w: w.value,
    Int64: lambda w: _I8(w.value),
    Bool: lambda w: w.value,
    Str: lambda w: w.value,
    Double: lambda w: w.value,
    DateTime: lambda w: xmlrpclib.DateTime("%04d%02d%02dT%02d:%02d:%02d" % w.value),
    Bytes: lambda w: w.value,
    Struct: lambda w: {name: to_xmlrpc(member) for name, member in w.value.items()},
    Array: lambda w: [to_xmlrpc(item) for item in w.value],
    Nil: lambda w: None,
}


def to_xmlrpc(value):
    """Convert a wire value to what the xmlrpc.client marshaller expects"""
    try:
        convert = _TO_XMLRPC[type(value)]
    except KeyError:
        raise TypeError("not a wire value: %r" % (value,)) from None
    return convert(value)


def _parse_datetime(text):
    match = _DATETIME.match(text)
    if not match:
        raise TypeMismatch("dateTime.iso8601", text)
    try:
        return DateTime(*(int(field) for field in match.groups()))
    except ValueError:
        raise TypeMismatch("dateTime.iso8601", text) from None


def from_xmlrpc(value):
    """Convert an unmarshalled xmlrpc.client value to a wire value"""
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return Int32(value)
        return Int64(value)
    if isinstance(value, float):
        return Double(value)
    if isinstance(value, str):
        return Str(value)
    if isinstance(value, xmlrpclib.DateTime):
        return _parse_datetime(value.value)
    if isinstance(value, datetime.datetime):
        return DateTime(value.year, value.month, value.day,
                        value.hour, value.minute, value.second)
    if isinstance(value, xmlrpclib.Binary):
        return Bytes(value.data)
    if isinstance(value, (bytes, bytearray)):
        return Bytes(value)
    if isinstance(value, dict):
        return Struct({name: from_xmlrpc(member) for name, member in value.items()})
    if isinstance(value, (list, tuple)):
        return Array(from_xmlrpc(item) for item in value)
    if value is None:
        return Nil()
    raise TypeMismatch("XML-RPC value", value)


def dumps_request(method_name, args):
    """Build the <methodCall> body for method_name applied to args"""
    marshaller = _Marshaller("utf-8", allow_none=True)
    params = marshaller.dumps(tuple(to_xmlrpc(arg) for arg in args))
    body = ("<?xml version='1.0'?>\n"
            "<methodCall>\n"
            "<methodName>%s</methodName>\n"
            "%s"
            "</methodCall>\n") % (xmlrpclib.escape(method_name), params)
    return body.encode("utf-8")


def split_endpoint(endpoint):
    """Return (scheme, host, handler) for an http or https endpoint URL"""
    parts = urllib.parse.urlsplit(endpoint)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise TransportError(endpoint, "unsupported XML-RPC endpoint")
    handler = parts.path or "/"
    if parts.query:
        handler += "?" + parts.query
    return parts.scheme, parts.netloc, handler


class RpcTransport:
    """Carries one XML-RPC request to an endpoint and returns its result"""

    def invoke(self, method_name, args, endpoint):
        """Call method_name with args (wire values) and return the wire value result.

        Raises TransportError when the exchange fails.
        """
        raise NotImplementedError

    def close(self):
        """Release any connection held by the transport"""


class XmlRpcTransport(RpcTransport):
    """RpcTransport over HTTP or HTTPS using xmlrpc.client"""

    def __init__(self, ignore_ssl=False, verbose=False):
        self.ignore_ssl = ignore_ssl
        self.verbose = verbose
        self._transports = {}

    def _transport(self, scheme):
        if scheme not in self._transports:
            if scheme == "https":
                context = None
                if self.ignore_ssl:
                    context = ssl._create_unverified_context()
                transport = xmlrpclib.SafeTransport(context=context)
            else:
                transport = xmlrpclib.Transport()
            transport.user_agent = USER_AGENT
            self._transports[scheme] = transport
        return self._transports[scheme]

    def invoke(self, method_name, args, endpoint):
        scheme, host, handler = split_endpoint(endpoint)
        body = dumps_request(method_name, args)
        logger.debug("POST %s://%s%s %s", scheme, host, handler, method_name)
        try:
            response = self._transport(scheme).request(host, handler, body,
                                                       verbose=self.verbose)
        except xmlrpclib.Fault as fault:
            raise TransportError(endpoint, "fault %s: %s" % (fault.faultCode,
                                                            fault.faultString)) from fault
        except xmlrpclib.ProtocolError as exn:
            raise TransportError(endpoint, "HTTP %s %s" % (exn.errcode, exn.errmsg)) from exn
        except (xmlrpclib.Error, OSError, httplib.HTTPException, ExpatError) as exn:
            raise TransportError(endpoint, exn) from exn
        if len(response) != 1:
            raise TransportError(endpoint, "expected one result, got %d" % len(response))
        return from_xmlrpc(response[0])

    def close(self):
        for transport in self._transports.values():
            transport.close()
        self._transports.clear()
