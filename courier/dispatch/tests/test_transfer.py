import httpx
import pytest
import respx

from courier.dispatch.core.exceptions import InvalidTicketError, RequestFailure
from courier.dispatch.models.transfer_file import TransferFile
from courier.dispatch.services.transfer import (
    DEFAULT_UPLOAD_TICKET,
    SignedTransferOrchestrator,
    get_download_url,
    upload_file,
)

TICKET_ROUTE = "/api/storage/upload-ticket"
DOWNLOAD_ROUTE = "/api/storage/download-url"


@pytest.fixture
def text_file():
    return TransferFile(name="b.txt", content_type="text/plain", data=b"hello storage")


class TestUpload:
    @pytest.mark.asyncio
    @respx.mock
    async def test_ticket_then_transfer(self, make_gate, text_file):
        ticket_route = respx.get("https://app.test/api/storage/upload-ticket").mock(
            return_value=httpx.Response(
                200, json={"file_path": "/a/b.txt", "file_url": "https://sign.test/a/b.txt"}
            )
        )
        put_route = respx.put("https://sign.test/a/b.txt").mock(return_value=httpx.Response(200))

        async with httpx.AsyncClient() as client:
            orchestrator = SignedTransferOrchestrator(make_gate(client))
            path = await orchestrator.upload_file(
                TICKET_ROUTE, text_file, {"folder": "claims", "acl": None}
            )

        assert path == "/a/b.txt"
        ticket_params = ticket_route.calls.last.request.url.params
        assert ticket_params["folder"] == "claims"
        assert "acl" not in ticket_params

        upload_request = put_route.calls.last.request
        assert upload_request.headers["content-type"] == "text/plain"
        assert upload_request.content == b"hello storage"

    @pytest.mark.asyncio
    @respx.mock
    async def test_legacy_alias_fields(self, make_gate, text_file):
        respx.get("https://app.test/api/storage/upload-ticket").mock(
            return_value=httpx.Response(
                200, json={"path": "/legacy/b.txt", "url": "https://sign.test/legacy"}
            )
        )
        put_route = respx.put("https://sign.test/legacy").mock(return_value=httpx.Response(204))

        async with httpx.AsyncClient() as client:
            path = await upload_file(make_gate(client), TICKET_ROUTE, text_file)

        assert path == "/legacy/b.txt"
        assert put_route.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "ticket",
        [
            {"path": "/a/b.txt"},
            {"file_url": "https://sign.test/a/b.txt"},
            {"file_path": "", "file_url": "https://sign.test/a/b.txt"},
            {},
        ],
    )
    async def test_invalid_ticket_aborts_before_transfer(self, make_gate, text_file, ticket):
        with respx.mock(assert_all_called=False) as router:
            router.get("https://app.test/api/storage/upload-ticket").mock(
                return_value=httpx.Response(200, json=ticket)
            )
            put_route = router.put(host="sign.test").mock(return_value=httpx.Response(200))

            async with httpx.AsyncClient() as client:
                with pytest.raises(InvalidTicketError):
                    await upload_file(make_gate(client), TICKET_ROUTE, text_file)

        assert not put_route.called

    @pytest.mark.asyncio
    async def test_non_object_ticket_is_invalid(self, make_gate, text_file):
        with respx.mock:
            respx.get("https://app.test/api/storage/upload-ticket").mock(
                return_value=httpx.Response(200, text="not json")
            )

            async with httpx.AsyncClient() as client:
                with pytest.raises(InvalidTicketError):
                    await upload_file(make_gate(client), TICKET_ROUTE, text_file)

    @pytest.mark.asyncio
    async def test_ticket_failure_propagates(self, make_gate, text_file):
        with respx.mock:
            respx.get("https://app.test/api/storage/upload-ticket").mock(
                return_value=httpx.Response(403, text="forbidden")
            )

            async with httpx.AsyncClient() as client:
                with pytest.raises(RequestFailure) as exc_info:
                    await upload_file(make_gate(client), TICKET_ROUTE, text_file)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    @respx.mock
    async def test_transfer_failure_fails_whole_upload(self, make_gate, text_file):
        respx.get("https://app.test/api/storage/upload-ticket").mock(
            return_value=httpx.Response(
                200, json={"file_path": "/a/b.txt", "file_url": "https://sign.test/a/b.txt"}
            )
        )
        respx.put("https://sign.test/a/b.txt").mock(
            return_value=httpx.Response(403, text="SignatureDoesNotMatch")
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RequestFailure, match="SignatureDoesNotMatch"):
                await upload_file(make_gate(client), TICKET_ROUTE, text_file)

    @pytest.mark.asyncio
    async def test_upload_from_disk(self, make_gate, tmp_path):
        source = tmp_path / "report.csv"
        source.write_bytes(b"a,b\n1,2\n")

        with respx.mock:
            respx.get("https://app.test/api/storage/upload-ticket").mock(
                return_value=httpx.Response(
                    200, json={"file_path": "/r/report.csv", "file_url": "https://sign.test/r"}
                )
            )
            put_route = respx.put("https://sign.test/r").mock(return_value=httpx.Response(200))

            async with httpx.AsyncClient() as client:
                path = await upload_file(
                    make_gate(client), TICKET_ROUTE, TransferFile.from_path(source)
                )

        assert path == "/r/report.csv"
        assert put_route.calls.last.request.content == b"a,b\n1,2\n"
        assert put_route.calls.last.request.headers["content-type"] == "text/csv"

    @pytest.mark.asyncio
    async def test_demo_mode_uploads_without_network(self, demo_gate, demo_client, demo_sleep, text_file):
        path = await upload_file(demo_gate, TICKET_ROUTE, text_file)

        assert path == DEFAULT_UPLOAD_TICKET["file_path"]
        assert demo_sleep.await_count == 2
        demo_client.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_demo_mode_custom_ticket(self, demo_gate, demo_sleep, text_file):
        path = await upload_file(
            demo_gate,
            TICKET_ROUTE,
            text_file,
            mock_ticket={"path": "/demo/x", "url": "https://sign.test/demo"},
        )

        assert path == "/demo/x"


class TestDownloadUrl:
    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_file_url(self, make_gate):
        route = respx.get("https://app.test/api/storage/download-url").mock(
            return_value=httpx.Response(200, json={"file_url": "https://x/y"})
        )

        async with httpx.AsyncClient() as client:
            url = await get_download_url(
                make_gate(client), "/a/b.txt", DOWNLOAD_ROUTE, {"disposition": "inline"}
            )

        assert url == "https://x/y"
        params = route.calls.last.request.url.params
        assert params["file_path"] == "/a/b.txt"
        assert params["disposition"] == "inline"

    @pytest.mark.asyncio
    @respx.mock
    async def test_file_path_argument_wins_over_options(self, make_gate):
        route = respx.get("https://app.test/api/storage/download-url").mock(
            return_value=httpx.Response(200, json={"url": "https://x/alias"})
        )

        async with httpx.AsyncClient() as client:
            url = await SignedTransferOrchestrator(make_gate(client)).get_download_url(
                "/real.txt", DOWNLOAD_ROUTE, {"file_path": "/other.txt"}
            )

        assert url == "https://x/alias"
        assert route.calls.last.request.url.params.get_list("file_path") == ["/real.txt"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_url_raises(self, make_gate):
        respx.get("https://app.test/api/storage/download-url").mock(
            return_value=httpx.Response(200, json={})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(InvalidTicketError):
                await get_download_url(make_gate(client), "/a/b.txt", DOWNLOAD_ROUTE)

    @pytest.mark.asyncio
    async def test_demo_mode_returns_mock_link(self, demo_gate, demo_sleep):
        url = await get_download_url(
            demo_gate, "/a/b.txt", DOWNLOAD_ROUTE, mock_response={"file_url": "https://demo/link"}
        )

        assert url == "https://demo/link"
