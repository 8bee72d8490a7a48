import pytest

from giftcards_api.api.dependencies.reloadly import get_app_settings

from reloadly_fakes import build_settings


@pytest.mark.asyncio
async def test_healthz_reports_reloadly_environment(api_client) -> None:
    response = await api_client.get("/healthz")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["reloadly"] in {"sandbox", "production"}


@pytest.mark.asyncio
async def test_readyz_reports_component_statuses(api_client) -> None:
    response = await api_client.get("/api/v1/readyz")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ready"
    components = payload["components"]
    assert components["reloadly_credentials"]["status"] == "ready"
    assert "production" in components["reloadly_environment"]["detail"]
    assert "allowed countries" in components["card_catalog"]["detail"]


@pytest.mark.asyncio
async def test_readyz_flags_missing_credentials(app, api_client) -> None:
    app.dependency_overrides[get_app_settings] = lambda: build_settings(
        reloadly_api_client_id="",
        use_reloadly_sandbox=True,
    )

    response = await api_client.get("/api/v1/readyz")

    payload = response.json()
    assert payload["status"] == "error"
    assert "RELOADLY_API_CLIENT_ID" in payload["components"]["reloadly_credentials"]["detail"]
    assert "sandbox" in payload["components"]["reloadly_environment"]["detail"]


@pytest.mark.asyncio
async def test_healthz_reflects_settings_the_app_was_created_with(api_client) -> None:
    response = await api_client.get("/healthz")

    assert response.json()["reloadly"] == "production"


@pytest.mark.asyncio
async def test_health_prefixed_aliases_are_not_served(api_client) -> None:
    assert (await api_client.get("/api/v1/health/readyz")).status_code == 404
    assert (await api_client.get("/api/v1/health/healthz")).status_code == 404
