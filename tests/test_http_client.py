import asyncio
import json

import pytest
import requests

from gaodun_extractor.extractor.m3u8_parser import M3U8Parser, parse_playlist
from gaodun_extractor.utils.http_client import AuthenticationError, HttpClient, generate_device_id


def make_response(status: int, body: str) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = "https://apigateway.gaodun.com/test"
    return response


@pytest.fixture()
def client():
    http_client = HttpClient(auth_token="token-123", max_qps=0, device_id="2abc")
    yield http_client
    http_client.close()


def stub_get(monkeypatch, client, response):
    calls = []

    def fake_get(url, params=None, headers=None, timeout=None):
        calls.append((url, params, headers, timeout))
        return response

    monkeypatch.setattr(client._api_session, "get", fake_get)
    return calls


def test_headers_carry_token_and_device(client):
    headers = client.headers
    assert headers["Authentication"] == "token-123"
    assert headers["ApiVersion"] == "264"
    assert json.loads(headers["X-Requested-Extend"])["deviceId"] == "2abc"
    headers["Authentication"] = "changed"
    assert client.headers["Authentication"] == "token-123"


def test_generated_device_id_shape():
    device_id = generate_device_id()
    assert device_id.startswith("2")
    assert len(device_id) == 33


def test_request_api_returns_json(monkeypatch, client):
    calls = stub_get(monkeypatch, client, make_response(200, '{"status": 0, "result": []}'))
    assert client.request_api("/ep-study/front/course/1/gradation", params={"a": 1}) == {"status": 0, "result": []}
    url, params, _, timeout = calls[0]
    assert url == "https://apigateway.gaodun.com/ep-study/front/course/1/gradation"
    assert params == {"a": 1}
    assert timeout == 10


def test_session_expired_marker_is_authentication_error(monkeypatch, client):
    stub_get(monkeypatch, client, make_response(200, '{"status": 1, "message": "登录超时"}'))
    with pytest.raises(AuthenticationError):
        client.request_api("g-study/api/v1/front/course/1/gradation/syllabus")


@pytest.mark.parametrize("status", [401, 403])
def test_rejected_token_is_authentication_error(monkeypatch, client, status):
    stub_get(monkeypatch, client, make_response(status, "{}"))
    with pytest.raises(AuthenticationError):
        client.request_api("g-study/api/v1/front/course/1/gradation/syllabus")


def test_server_errors_raise_http_error(monkeypatch, client):
    stub_get(monkeypatch, client, make_response(500, "oops"))
    with pytest.raises(requests.HTTPError):
        client.request_api("g-study/api/v1/front/course/1/gradation/syllabus")


def test_cdn_headers_drop_gateway_routing(client):
    merged = client._cdn_request_headers(client.headers)
    assert "Host" not in merged
    assert "Connection" not in merged
    assert merged["Authentication"] == "token-123"


class StubCdnClient:
    def __init__(self, bodies):
        self.bodies = bodies
        self.fetched = []

    async def fetch_cdn_text_async(self, url, headers=None):
        self.fetched.append((url, headers))
        return self.bodies[url]


def test_parse_playlist_resolves_relative_segments():
    body = "#EXTM3U\n#EXTINF:10,\nseg0.ts\n\n#EXTINF:10,\n/abs/seg1.ts\nhttps://cdn.other/seg2.ts\n#EXT-X-ENDLIST\n"
    assert parse_playlist("https://vod.gaodun.com/a/b/index.m3u8", body) == [
        "https://vod.gaodun.com/a/b/seg0.ts",
        "https://vod.gaodun.com/abs/seg1.ts",
        "https://cdn.other/seg2.ts",
    ]


def test_expand_passes_headers_through():
    stub = StubCdnClient({"https://vod/a.m3u8": "#EXTM3U\n0.ts\n1.ts\n"})
    urls = asyncio.run(M3U8Parser(stub).expand("https://vod/a.m3u8", {"Authentication": "x"}))
    assert urls == ["https://vod/0.ts", "https://vod/1.ts"]
    assert stub.fetched == [("https://vod/a.m3u8", {"Authentication": "x"})]


def test_expand_follows_first_variant_of_master_playlist():
    stub = StubCdnClient(
        {
            "https://vod/master.m3u8": "#EXTM3U\n#EXT-X-STREAM-INF:BANDWIDTH=800000\nlow/index.m3u8\n"
            "#EXT-X-STREAM-INF:BANDWIDTH=1600000\nhigh/index.m3u8\n",
            "https://vod/low/index.m3u8": "#EXTM3U\n#EXTINF:4,\n0.ts\n",
        }
    )
    urls = asyncio.run(M3U8Parser(stub).expand("https://vod/master.m3u8"))
    assert urls == ["https://vod/low/0.ts"]


def test_expand_empty_playlist():
    stub = StubCdnClient({"https://vod/empty.m3u8": "#EXTM3U\n#EXT-X-ENDLIST\n"})
    assert asyncio.run(M3U8Parser(stub).expand("https://vod/empty.m3u8")) == []


def test_gateway_retries_cover_throttling_and_server_errors(client):
    retry = client._api_session.get_adapter("https://apigateway.gaodun.com/").max_retries
    assert retry.total == 3
    assert set(retry.status_forcelist) == {429, 500, 502, 503, 504}
