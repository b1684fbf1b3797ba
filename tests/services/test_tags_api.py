# tests/services/test_tags_api.py
from __future__ import annotations

import uuid

from sqlalchemy import update

from tagvocab.database.models import Tag as DBTag, Tagging as DBTagging, Tenant


def _resolve(api_client, tenant_id, names):
    return api_client.post(f"/api/tenants/{tenant_id}/tags/resolve", json={"names": names})


def test_healthz(api_client):
    r = api_client.get("/healthz")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["app"] == "tagvocab"


def test_resolve_keeps_order_and_reuses_rows(api_client, tenant_id):
    r = _resolve(api_client, tenant_id, ["b", "a", "B"])
    assert r.status_code == 201, r.text
    b1, a, b2 = r.json()
    assert [b1["name"], a["name"], b2["name"]] == ["b", "a", "b"]
    assert b1["id"] == b2["id"]
    assert b1["comparison_key"] == "b"

    again = _resolve(api_client, tenant_id, ["a"]).json()
    assert again[0]["id"] == a["id"]


def test_resolve_rejects_blank_and_long_names(api_client, tenant_id):
    r = _resolve(api_client, tenant_id, ["ok", ""])
    assert r.status_code == 422
    assert "blank" in r.json()["detail"]

    r = _resolve(api_client, tenant_id, ["y" * 256])
    assert r.status_code == 422
    assert "too long" in r.json()["detail"]

    # nothing was written by the failed calls
    assert api_client.get(f"/api/tenants/{tenant_id}/tags/most-used").json() == []


def test_usage_endpoints(api_client, api_session, tenant_id):
    tags = {t["name"]: t for t in _resolve(api_client, tenant_id, ["rare", "hot", "warm"]).json()}
    for name, n in (("rare", 1), ("hot", 9), ("warm", 4)):
        api_session.execute(update(DBTag).where(DBTag.id == uuid.UUID(tags[name]["id"])).values(taggings_count=n))

    most = api_client.get(f"/api/tenants/{tenant_id}/tags/most-used", params={"limit": 2}).json()
    assert [t["name"] for t in most] == ["hot", "warm"]
    least = api_client.get(f"/api/tenants/{tenant_id}/tags/least-used").json()
    assert [t["name"] for t in least] == ["rare", "warm", "hot"]


def test_context_get_and_delete(api_client, api_session, tenant_id):
    tag = _resolve(api_client, tenant_id, ["ops"]).json()[0]
    api_session.add(DBTagging(
        tag_id=uuid.UUID(tag["id"]), tenant_id=tenant_id,
        taggable_type="Ticket", taggable_id=uuid.uuid4(), context="skills",
    ))
    api_session.flush()

    got = api_client.get(f"/api/tenants/{tenant_id}/tags/context/skills").json()
    assert [t["id"] for t in got] == [tag["id"]]
    assert api_client.get(f"/api/tenants/{tenant_id}/tags/context/interests").json() == []

    url = f"/api/tenants/{tenant_id}/tags/{tag['id']}"
    assert api_client.get(url).json()["name"] == "ops"
    assert api_client.delete(url).status_code == 204
    assert api_client.get(url).status_code == 404
    assert api_client.delete(url).status_code == 404
    assert api_client.get(f"/api/tenants/{tenant_id}/tags/context/skills").json() == []


def test_unknown_tag_is_404(api_client, tenant_id):
    assert api_client.get(f"/api/tenants/{tenant_id}/tags/{uuid.uuid4()}").status_code == 404


def test_tag_of_another_tenant_is_not_visible(api_client, api_session, tenant_id):
    intruder = Tenant(name="intruder")
    api_session.add(intruder)
    api_session.flush()
    secret = _resolve(api_client, tenant_id, ["secret"]).json()[0]

    foreign_url = f"/api/tenants/{intruder.id}/tags/{secret['id']}"
    assert api_client.get(foreign_url).status_code == 404
    assert api_client.delete(foreign_url).status_code == 404

    owned = api_client.get(f"/api/tenants/{tenant_id}/tags/{secret['id']}")
    assert owned.status_code == 200
    assert owned.json()["tenant_id"] == str(tenant_id)
