"""Test xapirpc/envelope.py"""
import unittest

from xapirpc.envelope import extract_session, get_value
from xapirpc.errors import MalformedResponse, RpcFault, TypeMismatch
from xapirpc.wire import Array, Int64, Str, Struct


class TestGetValue(unittest.TestCase):

    def test_value(self):
        self.assertEqual(get_value(Struct({"Value": Int64(5)})), Int64(5))

    def test_value_wins_over_error_description(self):
        envelope = Struct({"Value": Str("ok"), "ErrorDescription": Array([Str("X")])})
        self.assertEqual(get_value(envelope), Str("ok"))

    def test_error_description(self):
        envelope = Struct({"Status": Str("Failure"),
                           "ErrorDescription": Array([Str("X"), Str("Y")])})
        with self.assertRaises(RpcFault) as cm:
            get_value(envelope)
        self.assertEqual(cm.exception.description, ["X", "Y"])
        self.assertEqual(str(cm.exception), 'XML Rpc error: ["X","Y"]')
        self.assertEqual(cm.exception.code, "X")

    def test_fault_without_code(self):
        with self.assertRaises(RpcFault) as cm:
            get_value(Struct({"ErrorDescription": Struct({"reason": Str("?")})}))
        self.assertIsNone(cm.exception.code)

    def test_neither_member(self):
        with self.assertRaises(MalformedResponse) as cm:
            get_value(Struct({}))
        self.assertEqual(cm.exception.raw, Struct({}))

    def test_not_a_struct(self):
        with self.assertRaises(MalformedResponse):
            get_value(Str("Value"))
        with self.assertRaises(MalformedResponse):
            get_value(Array([Str("Value")]))


class TestExtractSession(unittest.TestCase):

    def test_session(self):
        envelope = Struct({"Status": Str("Success"), "Value": Str("OpaqueRef:abc")})
        self.assertEqual(extract_session(envelope), "OpaqueRef:abc")

    def test_session_must_be_a_string(self):
        with self.assertRaises(TypeMismatch) as cm:
            extract_session(Struct({"Value": Int64(1)}))
        self.assertEqual(cm.exception.actual, Int64(1))

    def test_login_failure(self):
        envelope = Struct({"ErrorDescription": Array([
            Str("SESSION_AUTHENTICATION_FAILED"), Str("root"), Str("Authentication failure")])})
        with self.assertRaises(RpcFault) as cm:
            extract_session(envelope)
        self.assertEqual(cm.exception.code, "SESSION_AUTHENTICATION_FAILED")
