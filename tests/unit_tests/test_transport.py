import io

import pytest
import requests
import responses

from printhost.client import exceptions, transport


@pytest.mark.parametrize(
    "host,expected",
    [
        ("example.com", "http://example.com/printer/info"),
        ("192.168.1.20:3344", "http://192.168.1.20:3344/printer/info"),
        ("http://example.com/", "http://example.com/printer/info"),
        ("http://example.com", "http://example.com/printer/info"),
        ("https://example.com", "https://example.com/printer/info"),
        ("https://example.com/repetier/", "https://example.com/repetier/printer/info"),
    ],
)
def test_make_url(host, expected):
    assert transport.make_url(host, "printer/info") == expected


def test_make_url_keeps_path_verbatim():
    # A leading slash is the caller's problem, not normalised away
    assert transport.make_url("http://example.com/", "/printer/info") == "http://example.com//printer/info"


def test_format_error_with_status():
    msg = transport.format_error('{"error": "nope"}', "Forbidden", 403)
    assert msg == 'HTTP 403: Forbidden, body: `{"error": "nope"}`'


def test_format_error_empty_body():
    assert transport.format_error("", "Not Found", 404) == "HTTP 404: Not Found"
    assert transport.format_error("  \n", "", 500) == "HTTP 500: Request failed"


def test_format_error_truncates_body():
    msg = transport.format_error("x" * 1000, "Bad Gateway", 502)
    assert "502" in msg
    assert msg.endswith("x...`")
    assert len(msg) < 300


def test_format_error_without_status():
    assert transport.format_error("", "Connection refused", 0) == "Connection refused"
    assert transport.format_error("", "", 0) == "Unknown error"


def test_set_auth_always_sends_api_key():
    session = transport.new_session()
    transport.set_auth(session, "")
    assert session.headers["X-Api-Key"] == ""
    assert session.verify is True


def test_set_auth_with_cafile():
    session = transport.new_session()
    transport.set_auth(session, "secret", "/etc/ssl/printer-ca.pem")
    assert session.headers["X-Api-Key"] == "secret"
    assert session.verify == "/etc/ssl/printer-ca.pem"


@responses.activate
def test_request_raises_api_error_on_non_2xx():
    responses.add(responses.GET, "http://printer.local/printer/info", body="denied", status=401)

    with pytest.raises(exceptions.PrintHostApiError) as exc:
        transport.request(transport.new_session(), "GET", "http://printer.local/printer/info")

    assert exc.value.status_code == 401
    assert exc.value.response_body == "denied"
    assert "HTTP 401" in str(exc.value)


@responses.activate
def test_request_raises_network_error():
    responses.add(
        responses.GET,
        "http://printer.local/printer/info",
        body=requests.ConnectionError("Connection refused"),
    )

    with pytest.raises(exceptions.PrintHostNetworkError) as exc:
        transport.request(transport.new_session(), "GET", "http://printer.local/printer/info")

    assert exc.value.status_code == 0
    assert "Connection refused" in str(exc.value)


@responses.activate
def test_request_passes_session_cafile_over_environment(monkeypatch):
    monkeypatch.setenv("REQUESTS_CA_BUNDLE", "/etc/ssl/certs/ca-certificates.crt")
    responses.add(responses.GET, "https://printer.local/printer/info", json={})
    session = transport.new_session()
    transport.set_auth(session, "secret", "/etc/ssl/printer-ca.pem")

    transport.request(session, "GET", "https://printer.local/printer/info")

    assert responses.calls[0].request.req_kwargs["verify"] == "/etc/ssl/printer-ca.pem"


def test_request_missing_cafile_raises_network_error(tmp_path):
    session = transport.new_session()
    transport.set_auth(session, "secret", str(tmp_path / "missing-ca.pem"))

    with pytest.raises(exceptions.PrintHostNetworkError) as exc:
        transport.request(session, "GET", "https://127.0.0.1:1/printer/info", timeout=1)

    assert exc.value.status_code == 0
    assert "missing-ca.pem" in str(exc.value)


def make_body(payload=b"G28\nG1 X10\n", progress_fn=None, chunk_size=16):
    return transport.MultipartBody(
        {"a": "upload"},
        "filename",
        io.BytesIO(payload),
        "benchy.gcode",
        len(payload),
        progress_fn=progress_fn,
        chunk_size=chunk_size,
    )


def test_multipart_body_encoding():
    body = make_body()
    data = body.read()

    assert len(data) == len(body)
    assert body.content_type == f"multipart/form-data; boundary={body.boundary}"
    assert data.startswith(f"--{body.boundary}\r\n".encode())
    assert b'Content-Disposition: form-data; name="a"\r\n\r\nupload\r\n' in data
    assert b'name="filename"; filename="benchy.gcode"' in data
    assert b"Content-Type: application/octet-stream\r\n\r\nG28\nG1 X10\n\r\n" in data
    assert data.endswith(f"--{body.boundary}--\r\n".encode())


def test_multipart_body_iterates_in_chunks():
    payload = b"G1 X1\n" * 100
    chunks = list(make_body(payload, chunk_size=32))

    assert all(len(chunk) <= 32 for chunk in chunks)
    assert payload in b"".join(chunks)


def test_multipart_body_reports_progress():
    seen = []
    body = make_body(b"G1 X1\n" * 100, progress_fn=lambda progress, cancel: seen.append(progress))
    list(body)

    assert [p.uploaded for p in seen] == sorted(p.uploaded for p in seen)
    assert seen[-1].uploaded == seen[-1].total == len(body)
    assert seen[-1].percent == 100.0


def test_multipart_body_cancel_aborts_read():
    calls = []

    def cancel_now(progress, cancel):
        calls.append(progress)
        cancel.set()

    body = make_body(progress_fn=cancel_now)

    with pytest.raises(exceptions.PrintHostUploadCancelled):
        body.read(8)
    with pytest.raises(exceptions.PrintHostUploadCancelled):
        body.read(8)
    assert len(calls) == 1
