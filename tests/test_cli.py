"""Test xapirpc/cli.py with the transport mocked out"""
import io
import math
import unittest

from mock import patch

from fake_transport import fake_transport, failure, invoked_methods, success
from xapirpc.cli import get_parser, main, parse_call_args, run
from xapirpc.config import Config
from xapirpc.errors import TransportError
from xapirpc.wire import Array, Bool, Double, Int64, Nil, Str, Struct

VM_RECORD = Struct({"name": Str("vm1"), "memory": Int64(2048)})


# pylint: disable=missing-function-docstring
class TestParser(unittest.TestCase):

    def test_short_h_is_the_host(self):
        args = get_parser().parse_args(["-h", "xapi.example", "-u", "root", "-p", "pw",
                                        "VM", "get_all"])
        self.assertEqual((args.host, args.user, args.password), ("xapi.example", "root", "pw"))
        self.assertEqual((args.xapi_class, args.method, args.args), ("VM", "get_all", []))
        self.assertFalse(args.compact)

    def test_call_arguments(self):
        args = get_parser().parse_args(["--compact", "VM", "start", "OpaqueRef:1", "false"])
        self.assertTrue(args.compact)
        self.assertEqual(args.args, ["OpaqueRef:1", "false"])


class TestParseCallArgs(unittest.TestCase):

    def test_heuristic(self):
        self.assertEqual(parse_call_args(["OpaqueRef:1", "true", "42", "0.5"]),
                         [Str("OpaqueRef:1"), Bool(True), Int64(42), Double(0.5)])

    def test_json(self):
        self.assertEqual(parse_call_args(['"42"', '{"k": [1, null]}'], json_args=True),
                         [Str("42"), Struct({"k": Array([Int64(1), Nil()])})])

    def test_invalid_json(self):
        with self.assertRaises(ValueError):
            parse_call_args(["not-json"], json_args=True)


class TestRun(unittest.TestCase):

    def test_transport_is_closed_when_login_fails(self):
        transport = fake_transport({
            "session.login_with_password": TransportError("http://h", "refused")})
        with self.assertRaises(TransportError):
            run(Config("http://h", "u", "p"), "VM", "get_all", [], transport)
        transport.close.assert_called_with()


@patch("sys.stderr", new_callable=io.StringIO)
@patch("sys.stdout", new_callable=io.StringIO)
@patch("xapirpc.cli.XmlRpcTransport")
class TestMain(unittest.TestCase):

    def test_success(self, mock_transport_class, mock_stdout, mock_stderr):
        transport = fake_transport({"host.get_record": success(VM_RECORD)})
        mock_transport_class.return_value = transport

        status = main(["-h", "xapi.example", "-u", "root", "-p", "pw",
                       "host", "get_record", "OpaqueRef:h", "42", "true"])

        self.assertEqual(status, 0)
        self.assertEqual(mock_stdout.getvalue(),
                         '{\n  "name": "vm1",\n  "memory": 2048.0\n}\n')
        self.assertEqual(mock_stderr.getvalue(), "")
        mock_transport_class.assert_called_once_with(ignore_ssl=False)
        transport.invoke.assert_any_call(
            "host.get_record", [Str("tok123"), Str("OpaqueRef:h"), Int64(42), Bool(True)],
            "https://xapi.example")
        self.assertEqual(invoked_methods(transport)[-1], "session.logout")

    def test_compact(self, mock_transport_class, mock_stdout, _):
        mock_transport_class.return_value = fake_transport(
            {"host.get_record": success(VM_RECORD)})
        self.assertEqual(main(["--compact", "host", "get_record"]), 0)
        self.assertEqual(mock_stdout.getvalue(), '{"name":"vm1","memory":2048.0}\n')

    def test_defaults_and_environment(self, mock_transport_class, _, __):
        transport = fake_transport({"VM.get_all": success(Array([]))})
        mock_transport_class.return_value = transport
        with patch.dict("os.environ", {"XAPI_USER": "env-user"}):
            main(["--ignore-ssl", "VM", "get_all"])
        transport.invoke.assert_any_call(
            "session.login_with_password", [Str("env-user"), Str("guest")],
            "http://127.0.0.1")
        mock_transport_class.assert_called_once_with(ignore_ssl=True)

    def test_fault(self, mock_transport_class, mock_stdout, mock_stderr):
        transport = fake_transport({"VM.get_by_uuid": failure("UUID_INVALID", "VM", "x")})
        mock_transport_class.return_value = transport

        self.assertEqual(main(["VM", "get_by_uuid", "x"]), 1)
        self.assertEqual(mock_stdout.getvalue(), "")
        self.assertEqual(mock_stderr.getvalue(),
                         'Error: XML Rpc error: ["UUID_INVALID","VM","x"]\n')
        self.assertEqual(invoked_methods(transport)[-1], "session.logout")

    def test_login_failure_prevents_the_call(self, mock_transport_class, _, mock_stderr):
        transport = fake_transport({
            "session.login_with_password": failure("SESSION_AUTHENTICATION_FAILED")})
        mock_transport_class.return_value = transport

        self.assertEqual(main(["VM", "get_all"]), 1)
        self.assertEqual(invoked_methods(transport), ["session.login_with_password"])
        self.assertIn("SESSION_AUTHENTICATION_FAILED", mock_stderr.getvalue())

    def test_json_args(self, mock_transport_class, _, __):
        transport = fake_transport({"VM.set_other_config": success(Str(""))})
        mock_transport_class.return_value = transport
        self.assertEqual(main(["--json-args", "VM", "set_other_config",
                               '"OpaqueRef:1"', '{"auto_poweron": "true"}']), 0)
        transport.invoke.assert_any_call(
            "VM.set_other_config",
            [Str("tok123"), Str("OpaqueRef:1"), Struct({"auto_poweron": Str("true")})],
            "http://127.0.0.1")

    def test_invalid_json_args(self, mock_transport_class, mock_stdout, mock_stderr):
        self.assertEqual(main(["--json-args", "VM", "get_by_uuid", "{"]), 1)
        mock_transport_class.assert_not_called()
        self.assertEqual(mock_stdout.getvalue(), "")
        self.assertTrue(mock_stderr.getvalue().startswith("Error: argument '{'"))

    def test_verbose(self, mock_transport_class, _, mock_stderr):
        mock_transport_class.return_value = fake_transport(
            {"VM.get_all": success(Array([]))})
        self.assertEqual(main(["-v", "-p", "hunter2", "VM", "get_all"]), 0)
        log = mock_stderr.getvalue()
        self.assertIn("Calling VM.get_all on http://127.0.0.1", log)
        self.assertIn("Logging in to http://127.0.0.1 as guest", log)
        self.assertNotIn("hunter2", log)
        self.assertNotIn("tok123", log)

    def test_json_number_beyond_the_double_range(self, mock_transport_class, _, __):
        transport = fake_transport({"VM.get_all": success(Array([]))})
        mock_transport_class.return_value = transport
        self.assertEqual(main(["--json-args", "VM", "get_all", "1" + "0" * 400]), 0)
        transport.invoke.assert_any_call(
            "VM.get_all", [Str("tok123"), Double(math.inf)], "http://127.0.0.1")

    def test_very_long_integer_argument(self, mock_transport_class, _, __):
        transport = fake_transport({"VM.get_all": success(Array([]))})
        mock_transport_class.return_value = transport
        self.assertEqual(main(["VM", "get_all", "1" * 5000]), 0)
        transport.invoke.assert_any_call(
            "VM.get_all", [Str("tok123"), Double(math.inf)], "http://127.0.0.1")
