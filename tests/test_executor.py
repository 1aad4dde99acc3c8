"""
Request executor tests for httpdefer
"""

import pytest

from httpdefer import Failure, Method, RequestSpec, Success, execute
from tests.fake_transport import FakeTransport


class TestMethodDispatch:
    """Test verb and body handling"""

    def test_get_sends_no_body(self, transport):
        """Test GET never sends a body"""
        execute(RequestSpec(Method.GET, "http://a.com/x", body="ignored"), transport)
        assert transport.last_call.method == "GET"
        assert transport.last_call.body is None

    def test_delete_sends_no_body(self, transport):
        """Test DELETE is sent explicitly and without a body"""
        execute(RequestSpec(Method.DELETE, "http://a.com/x"), transport)
        assert transport.last_call.method == "DELETE"
        assert transport.last_call.body is None

    def test_post_sends_body(self, transport):
        """Test POST sends the body UTF-8 encoded"""
        execute(RequestSpec(Method.POST, "http://a.com/x", body='{"test": "data"}'), transport)
        assert transport.last_call.method == "POST"
        assert transport.last_call.body == b'{"test": "data"}'

    def test_post_without_body_sends_empty(self, transport):
        """Test an absent POST body is sent as empty"""
        execute(RequestSpec(Method.POST, "http://a.com/x"), transport)
        assert transport.last_call.body == b""

    def test_bytes_body_sent_unchanged(self, transport):
        """Test a bytes body is passed through without re-encoding"""
        execute(RequestSpec(Method.POST, "http://a.com/x", body=b'{"a": 1}\xff'), transport)
        assert transport.last_call.body == b'{"a": 1}\xff'

    def test_put_is_explicit(self, transport):
        """Test PUT keeps its verb with or without a body"""
        execute(RequestSpec(Method.PUT, "http://a.com/x"), transport)
        execute(RequestSpec(Method.PUT, "http://a.com/x", body="ü"), transport)
        assert [c.method for c in transport.calls] == ["PUT", "PUT"]
        assert transport.calls[0].body == b""
        assert transport.calls[1].body == "ü".encode("utf-8")

    def test_string_method_accepted(self, transport):
        """Test a lowercase verb string is parsed"""
        spec = RequestSpec("put", "http://a.com/x", body="b")
        assert spec.method is Method.PUT
        execute(spec, transport)
        assert transport.last_call.method == "PUT"

    def test_unknown_method_rejected(self):
        """Test unsupported verbs are refused when the spec is built"""
        with pytest.raises(ValueError):
            RequestSpec("PATCH", "http://a.com/x")


class TestHeaders:
    """Test header lines reach the transport in order"""

    def test_order_and_duplicates(self, transport):
        """Test headers are applied in order with no deduplication"""
        spec = RequestSpec(
            Method.GET,
            "http://a.com/",
            headers=("Accept: application/json", "X: 1", "X: 2"),
        )
        execute(spec, transport)
        assert transport.last_call.headers == [
            ("Accept", "application/json"),
            ("X", "1"),
            ("X", "2"),
        ]


class TestOutcome:
    """Test how exchanges are reported"""

    def test_success(self, transport):
        """Test a completed exchange is a Success with status and body"""
        outcome = execute(RequestSpec(Method.GET, "http://a.com/"), transport)
        assert outcome == Success(status_code=200, body="OK")
        assert outcome.ok

    def test_error_status_is_success(self):
        """Test 4xx and 5xx are not failures at this layer"""
        for status in (404, 500):
            fake = FakeTransport(status_code=status, chunks=[b"Not Found"])
            outcome = execute(RequestSpec(Method.GET, "http://a.com/"), fake)
            assert isinstance(outcome, Success)
            assert outcome.status_code == status

    def test_chunks_are_accumulated(self):
        """Test the body is assembled from every chunk"""
        fake = FakeTransport(chunks=[b"part0;", b"part1;", b"part2;"])
        outcome = execute(RequestSpec(Method.GET, "http://a.com/"), fake)
        assert outcome.body == "part0;part1;part2;"

    def test_empty_body(self):
        """Test an exchange without body gives an empty string"""
        fake = FakeTransport(status_code=204, chunks=[])
        outcome = execute(RequestSpec(Method.GET, "http://a.com/"), fake)
        assert outcome == Success(status_code=204, body="")

    def test_utf8_split_across_chunks(self):
        """Test multi-byte characters split between chunks decode correctly"""
        data = "你好".encode("utf-8")
        fake = FakeTransport(chunks=[data[:2], data[2:]])
        outcome = execute(RequestSpec(Method.GET, "http://a.com/"), fake)
        assert outcome.body == "你好"

    def test_non_utf8_body(self):
        """Test bodies that are not UTF-8 fall back to latin-1"""
        fake = FakeTransport(chunks=[b"caf\xe9"])
        outcome = execute(RequestSpec(Method.GET, "http://a.com/"), fake)
        assert outcome.body == "café"

    def test_transport_failure(self):
        """Test a transport error becomes a Failure with its message"""
        fake = FakeTransport(error="Couldn't resolve host name")
        outcome = execute(RequestSpec(Method.GET, "http://nowhere.invalid/"), fake)
        assert outcome == Failure("Couldn't resolve host name")
        assert not outcome.ok

    def test_no_retry(self):
        """Test a failure is attempted exactly once"""
        fake = FakeTransport(error="Connection refused")
        execute(RequestSpec(Method.POST, "http://a.com/", body="x"), fake)
        assert len(fake.calls) == 1

    def test_unexpected_error_propagates(self):
        """Test non-transport errors are not turned into failures"""
        fake = FakeTransport()
        fake.crash = KeyError("boom")
        with pytest.raises(KeyError):
            execute(RequestSpec(Method.GET, "http://a.com/"), fake)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
