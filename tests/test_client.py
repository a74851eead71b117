"""Tests for the HTTP client against a local aiohttp server."""

import pytest
from aiohttp import web
from aiohttp import test_utils

from registro_cli.client import HttpClient, parse_result
from registro_cli.errors import BusinessError, ResponseFormatError, TransportError
from registro_cli.form import FileInput, RegistrationForm
from registro_cli.submitter import FormSubmitter
from registro_cli.utils import Config


def make_app(response, received):
    async def handler(request):
        received["content_type"] = request.content_type
        received["form"] = dict(await request.post())
        return response

    app = web.Application()
    app.router.add_post("/exec", handler)
    return app


class TestParseResult:

    def test_success_carries_id(self):
        result = parse_result({"success": True, "id": "R123"})
        assert result.ok
        assert result.id == "R123"

    def test_failure_raises_business_error(self):
        with pytest.raises(BusinessError) as exc_info:
            parse_result({"success": False, "message": "Duplicate entry"})
        assert exc_info.value.user_message == "Duplicate entry"

    def test_non_object_is_format_error(self):
        with pytest.raises(ResponseFormatError):
            parse_result(["success"])


@pytest.mark.asyncio
async def test_posts_url_encoded_form():
    received = {}
    app = make_app(web.json_response({"success": True, "id": "R9"}), received)

    async with test_utils.TestServer(app) as server:
        client = HttpClient(Config(url=str(server.make_url("/exec"))))
        result = await client.submit({"nombre": "Ana", "email": "ana@example.com"})

    assert result.ok and result.id == "R9"
    assert received["content_type"] == "application/x-www-form-urlencoded"
    assert received["form"] == {"nombre": "Ana", "email": "ana@example.com"}


@pytest.mark.asyncio
async def test_error_status_still_parses_body():
    received = {}
    app = make_app(web.json_response({"success": False, "message": "Duplicate entry"}, status=400), received)

    async with test_utils.TestServer(app) as server:
        client = HttpClient(Config(url=str(server.make_url("/exec"))))
        with pytest.raises(BusinessError) as exc_info:
            await client.submit({"nombre": "Ana"})

    assert exc_info.value.user_message == "Duplicate entry"


@pytest.mark.asyncio
async def test_html_body_is_format_error():
    app = make_app(web.Response(text="<html>oops</html>", content_type="text/html"), {})

    async with test_utils.TestServer(app) as server:
        client = HttpClient(Config(url=str(server.make_url("/exec"))))
        with pytest.raises(ResponseFormatError):
            await client.post_form({"nombre": "Ana"})


@pytest.mark.asyncio
async def test_refused_connection_is_transport_error():
    client = HttpClient(Config(url="http://127.0.0.1:1/exec", timeout=5))
    with pytest.raises(TransportError) as exc_info:
        await client.post_form({"nombre": "Ana"})
    assert exc_info.value.cause is not None


@pytest.mark.asyncio
async def test_undecodable_body_is_format_error():
    body = web.Response(body=b'\xff\xfe{"success": true}', content_type="application/json")
    app = make_app(body, {})

    async with test_utils.TestServer(app) as server:
        client = HttpClient(Config(url=str(server.make_url("/exec"))))
        with pytest.raises(ResponseFormatError) as exc_info:
            await client.post_form({"nombre": "Ana"})

    assert isinstance(exc_info.value.cause, UnicodeDecodeError)


@pytest.mark.asyncio
async def test_undecodable_body_reaches_submitter_as_format_error(notifier):
    body = web.Response(body=b'\xff\xfe{"success": true}', content_type="application/json")
    app = make_app(body, {})
    form = RegistrationForm()
    form.set("nombre", "Ana")
    form.set("apellido", "García")
    form.set("documento", "123")
    form.set("email", "ana@example.com")

    async with test_utils.TestServer(app) as server:
        client = HttpClient(Config(url=str(server.make_url("/exec"))))
        result = await FormSubmitter(form, FileInput(), client, notifier).submit()

    assert result.kind == "format"
    assert notifier.last.title == "Error de Conexión"
    assert form.get("nombre") == "Ana"
