import asyncio
import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "")
HAS_POSTGRES = TEST_DATABASE_URL.startswith(("postgres://", "postgresql"))


@pytest.fixture(
    params=[
        "sqlite",
        pytest.param(
            "postgresql",
            marks=pytest.mark.skipif(
                not HAS_POSTGRES, reason="needs TEST_DATABASE_URL pointing at PostgreSQL"
            ),
        ),
    ]
)
def backend(request):
    return request.param


@pytest.fixture
def concurrent_app(backend, app_factory):
    if backend == "postgresql":
        return app_factory(DATABASE_URL=TEST_DATABASE_URL, DB_POOL_SIZE=10)
    return app_factory()


async def _stored_emails(app, backend, stored_rows) -> list:
    if backend == "sqlite":
        return [row[0] for row in stored_rows()]
    async with app.state.database.engine.connect() as conn:
        result = await conn.execute(text("SELECT email FROM preinscriptions ORDER BY id"))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_concurrent_signups_with_same_email_store_one_record(
    concurrent_app, backend, stored_rows
):
    app = concurrent_app

    async with app.router.lifespan_context(app):
        if backend == "postgresql":
            async with app.state.database.engine.begin() as conn:
                await conn.execute(text("TRUNCATE preinscriptions RESTART IDENTITY"))

        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as ac:
            variants = ["race@example.com", "RACE@example.com", " Race@Example.com "] * 10
            distinct = [f"other{i}@example.com" for i in range(20)]
            responses = await asyncio.gather(
                *(ac.post("/signup", json={"email": email}) for email in variants + distinct)
            )

            assert {r.status_code for r in responses} == {200}
            assert all(r.json()["ok"] is True for r in responses)

            count = await ac.get("/count")
            assert count.json() == {"count": 21}

        emails = await _stored_emails(app, backend, stored_rows)

    assert len(emails) == 21
    assert emails.count("race@example.com") == 1
    assert sorted(e for e in emails if e.startswith("other")) == sorted(distinct)
