"""Unit tests for the subscription tier gate

Tests cover:
- Missing header rejected
- Free tier rejected
- Pro and enterprise admitted, case-insensitively
- Custom tier sets
"""

from __future__ import annotations

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from cardinal.api.middleware.tier import require_pro_tier, require_tier


@pytest.fixture
def client():
    app = FastAPI()

    @app.get("/pro/thing")
    async def pro_thing(tier: str = Depends(require_pro_tier)):
        return {"tier": tier}

    @app.get("/enterprise/thing")
    async def enterprise_thing(tier: str = Depends(require_tier("enterprise"))):
        return {"tier": tier}

    return TestClient(app)


def test_missing_header_forbidden(client):
    response = client.get("/pro/thing")

    assert response.status_code == 403
    assert response.json()["detail"] == "Missing X-Cardinal-Tier header"


def test_blank_header_treated_as_missing(client):
    response = client.get("/pro/thing", headers={"X-Cardinal-Tier": "   "})

    assert response.status_code == 403
    assert "Missing" in response.json()["detail"]


def test_free_tier_forbidden(client):
    response = client.get("/pro/thing", headers={"X-Cardinal-Tier": "free"})

    assert response.status_code == 403
    assert response.json()["detail"] == "This endpoint requires one of these tiers: enterprise, pro"


@pytest.mark.parametrize(("header", "tier"), [("pro", "pro"), ("Enterprise", "enterprise"), (" PRO ", "pro")])
def test_paid_tiers_admitted(client, header, tier):
    response = client.get("/pro/thing", headers={"X-Cardinal-Tier": header})

    assert response.status_code == 200
    assert response.json() == {"tier": tier}


def test_custom_tier_set(client):
    assert client.get("/enterprise/thing", headers={"X-Cardinal-Tier": "pro"}).status_code == 403
    assert client.get("/enterprise/thing", headers={"X-Cardinal-Tier": "enterprise"}).status_code == 200
