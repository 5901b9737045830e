import asyncio

import httpx
import pytest

from uscf_roster.scraping.validate import (
    check_identifier,
    looks_like_date,
    validate_candidates,
)


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("20240101", True),
        ("20291231", True),
        ("19991231", True),
        ("19812345", False),
        ("30123456", False),
        ("12345678", False),
    ],
)
def test_looks_like_date(identifier: str, expected: bool):
    assert looks_like_date(identifier) is expected


def test_date_like_candidates_skip_network(make_client):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"id": request.url.path.rsplit("/", 1)[-1]})

    async def run():
        async with make_client(handler) as client:
            return await validate_candidates(["20240101", "19990101", "20212345"], client)

    assert asyncio.run(run()) == set()
    assert calls == []


def test_confirms_only_matching_records(make_client):
    pages = {
        ("ratings-api.uschess.org", "/api/v1/members/30123456"): {"id": "30123456"},
        ("ratings-api.uschess.org", "/api/v1/members/31111111"): {"id": "99999999"},
        ("ratings-api.uschess.org", "/api/v1/members/32222222"): {"name": "no id"},
        ("ratings-api.uschess.org", "/api/v1/members/33333333"): 500,
        ("ratings-api.uschess.org", "/api/v1/members/34444444"): "<html>not json</html>",
        ("ratings-api.uschess.org", "/api/v1/members/35555555"): ["30123456"],
    }

    async def run():
        async with make_client(pages) as client:
            return await validate_candidates(
                [
                    "30123456",
                    "31111111",
                    "32222222",
                    "33333333",
                    "34444444",
                    "35555555",
                    "36666666",  # 404
                ],
                client,
            )

    assert asyncio.run(run()) == {"30123456"}


def test_numeric_id_field_accepted(make_client):
    pages = {("ratings-api.uschess.org", "/api/v1/members/30123456"): {"id": 30123456}}

    async def run():
        async with make_client(pages) as client:
            return await check_identifier("30123456", client)

    assert asyncio.run(run()) == "30123456"


def test_network_errors_do_not_abort(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        identifier = request.url.path.rsplit("/", 1)[-1]
        if identifier == "41111111":
            raise httpx.ConnectError("connection refused", request=request)
        if identifier == "42222222":
            raise httpx.ReadTimeout("timed out", request=request)
        return httpx.Response(200, json={"id": identifier})

    async def run():
        async with make_client(handler) as client:
            return await validate_candidates(
                ["41111111", "42222222", "43333333", "44444444"], client
            )

    assert asyncio.run(run()) == {"43333333", "44444444"}


def test_batches_bound_concurrency_and_report_progress(make_client):
    state = {"in_flight": 0, "max_in_flight": 0}
    progress = []

    async def handler(request: httpx.Request) -> httpx.Response:
        state["in_flight"] += 1
        state["max_in_flight"] = max(state["max_in_flight"], state["in_flight"])
        await asyncio.sleep(0.01)
        state["in_flight"] -= 1
        return httpx.Response(200, json={"id": request.url.path.rsplit("/", 1)[-1]})

    candidates = [f"5{n:07d}" for n in range(12)]

    async def run():
        async with make_client(handler) as client:
            return await validate_candidates(
                candidates,
                client,
                batch_size=5,
                progress=lambda done, total: progress.append((done, total)),
            )

    assert asyncio.run(run()) == set(candidates)
    assert state["max_in_flight"] == 5
    assert progress == [(5, 12), (10, 12), (12, 12)]


def test_empty_candidates(make_client):
    async def run():
        async with make_client({}) as client:
            return await validate_candidates([], client)

    assert asyncio.run(run()) == set()
