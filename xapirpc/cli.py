"""
xapirpc - call one xapi method and print the result as JSON.

Usage:
    xapirpc [--host HOST] [--user USER] [--pass PASS] [--compact] <class> <method> [args...]

Logs in with session.login_with_password, calls <class>.<method> with the
session followed by args, prints the result and logs out again. Each arg is
sent as a boolean, an integer, a double or a string, whichever it parses as
first. Do not pass a session as an argument.
"""
import argparse
import contextlib
import json
import logging
import sys

from xapirpc import __version__, logger
from xapirpc.bridge import dumps, from_json
from xapirpc.config import Config
from xapirpc.errors import XapiRpcError
from xapirpc.heuristic import as_value_heuristic
from xapirpc.session import RpcSession
from xapirpc.transport import XmlRpcTransport


def get_parser():
    """Return the argument parser; -h is the host, so help is only --help"""
    parser = argparse.ArgumentParser(
        prog="xapirpc", add_help=False,
        description="Minimal xapi XML-RPC command line client")
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    parser.add_argument("-h", "--host",
                        help="xapi host; can be passed with the XAPI_HOST env variable")
    parser.add_argument("-u", "--user",
                        help="host user name; can be passed with the XAPI_USER env variable")
    parser.add_argument("-p", "--pass", dest="password",
                        help="host user password; can be passed with the XAPI_PASSWORD "
                             "env variable")
    parser.add_argument("--compact", action="store_true",
                        help="print the result as single line JSON")
    parser.add_argument("--ignore-ssl", action="store_true",
                        help="do not verify the certificate of an https host")
    parser.add_argument("--json-args", action="store_true",
                        help="read each argument as JSON instead of guessing its type")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log the session and the call on stderr")
    parser.add_argument("xapi_class", metavar="class",
                        help="case sensitive name of the xapi class")
    parser.add_argument("method", help="case sensitive name of the xapi method")
    parser.add_argument("args", nargs="*",
                        help="ordered arguments for the call (if any)")
    return parser


def parse_call_args(raw_args, json_args=False):
    """Turn the command line arguments into wire values"""
    if not json_args:
        return [as_value_heuristic(raw) for raw in raw_args]
    params = []
    for raw in raw_args:
        try:
            params.append(from_json(json.loads(raw)))
        except ValueError as exn:
            raise ValueError("argument %r is not valid JSON: %s" % (raw, exn)) from exn
    return params


def run(config, cls, method, args, transport=None):
    """Log in, call cls.method with args, log out and return the JSON result"""
    if transport is None:
        transport = XmlRpcTransport(ignore_ssl=config.ignore_ssl)
    with contextlib.closing(transport):
        with RpcSession(config.host, config.user, config.password, transport) as session:
            return session.call(cls, method, args)


def main(argv=None):
    """Entry point of the xapirpc command; returns the exit status"""
    args = get_parser().parse_args(argv)
    if args.verbose:
        logger.logToStderr(logging.DEBUG)

    config = Config.resolve(host=args.host, user=args.user, password=args.password,
                            compact=args.compact, ignore_ssl=args.ignore_ssl)
    try:
        params = parse_call_args(args.args, args.json_args)
        logger.info("Calling %s.%s on %s", args.xapi_class, args.method, config.host)
        result = run(config, args.xapi_class, args.method, params)
    except (XapiRpcError, ValueError) as exn:
        print("Error: %s" % exn, file=sys.stderr)
        return 1
    finally:
        logger.closeLogs()

    print(dumps(result, config.compact))
    return 0
