"""
Tests for the public read path: reporter contact fields never leave the
privileged views, tracking lookups and data export.
"""
import json

import pytest

REPORTER = {
    "reporter_name": "Drita Hoxha",
    "reporter_email": "drita.hoxha@example.com",
    "reporter_phone": "+355691234567",
}


@pytest.fixture
def reported(submit):
    """A report filed with full reporter contact details."""
    return submit(
        title="Kanal i bllokuar",
        description='Uji del në rrugë, "urgjent", pranë shkollës',
        include_location="true",
        latitude="41.1150",
        longitude="20.0780",
        **REPORTER,
    )


def _assert_no_contact_data(text: str):
    for value in REPORTER.values():
        assert value not in text


# --- Public split ---

def test_public_list_hides_reporter_fields(client, reported):
    response = client.get("/api/public/reports")
    assert response.status_code == 200
    assert any(r["tracking_code"] == reported["tracking_code"] for r in response.json())
    for report in response.json():
        assert not {"reporter_name", "reporter_email", "reporter_phone"} & report.keys()
    _assert_no_contact_data(response.text)


def test_public_list_newest_first_and_limited(client, submit):
    first = submit()["tracking_code"]
    second = submit()["tracking_code"]
    reports = client.get("/api/public/reports", params={"limit": 2}).json()
    assert [r["tracking_code"] for r in reports] == [second, first]


def test_track_page_hides_reporter_fields(client, reported):
    response = client.get("/track", params={"code": reported["tracking_code"]})
    assert response.status_code == 200
    assert reported["tracking_code"] in response.text
    _assert_no_contact_data(response.text)


def test_home_and_stats_pages_hide_reporter_fields(client, reported):
    for path in ("/", "/stats"):
        response = client.get(path)
        assert response.status_code == 200
        _assert_no_contact_data(response.text)


def test_admin_view_has_reporter_fields(client, reported, super_admin):
    public = client.get(f"/api/public/reports/{reported['tracking_code']}").json()
    report = client.get(f"/api/reports/{public['id']}").json()
    assert report["reporter_email"] == REPORTER["reporter_email"]
    assert report["reporter_phone"] == REPORTER["reporter_phone"]


# --- Tracking ---

def test_track_lookup_ignores_case_and_whitespace(client, reported):
    code = reported["tracking_code"]
    response = client.get("/track", params={"code": f"  {code.lower()} "})
    assert response.status_code == 200
    assert 'class="report-card"' in response.text
    assert "Kanal i bllokuar" in response.text


def test_track_unknown_code(client):
    response = client.get("/track", params={"code": "ZZZZZZZZ"})
    assert response.status_code == 200
    assert "Nuk u gjet asnjë raportim me këtë kod." in response.text
    assert 'class="report-card"' not in response.text

    api = client.get("/api/public/reports/ZZZZZZZZ")
    assert api.status_code == 404


def test_track_without_code_lists_recent(client, reported):
    response = client.get("/track")
    assert response.status_code == 200
    assert "data-live-reports" in response.text
    assert 'class="report-card"' not in response.text


# --- Export ---

def test_json_export(client, reported):
    code = reported["tracking_code"]
    response = client.get(f"/api/public/reports/{code.lower()}/export", params={"format": "json"})
    assert response.status_code == 200
    assert f'filename="raport-{code}.json"' in response.headers["content-disposition"]

    data = json.loads(response.content)
    assert set(data) == {"export_date", "gdpr_notice", "report"}
    assert data["report"]["tracking_code"] == code
    assert data["report"]["neighborhood"] is not None
    assert "photo_url" not in data["report"]
    _assert_no_contact_data(response.text)


def test_csv_export(client, reported):
    code = reported["tracking_code"]
    response = client.get(f"/api/public/reports/{code}/export", params={"format": "csv"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert f'filename="raport-{code}.csv"' in response.headers["content-disposition"]

    text = response.content.decode("utf-8")
    assert text.startswith("\ufeff")
    header, row = text.lstrip("\ufeff").split("\n")
    assert header == '"ID","Kodi","Titulli","Përshkrimi","Statusi","Lagja","Krijuar","Përditësuar"'
    assert '"Kanal i bllokuar"' in row
    assert '"Uji del në rrugë, ""urgjent"", pranë shkollës"' in row
    _assert_no_contact_data(text)


def test_export_unknown_code(client):
    assert client.get("/api/public/reports/ZZZZZZZZ/export").status_code == 404


def test_export_rejects_unknown_format(client, reported):
    response = client.get(f"/api/public/reports/{reported['tracking_code']}/export", params={"format": "xml"})
    assert response.status_code == 422


# --- Statistics endpoint ---

def test_public_stats_counts(client, submit):
    before = client.get("/api/public/stats").json()
    submit(include_location="true", latitude="41.1098", longitude="20.0789")
    after = client.get("/api/public/stats").json()

    assert after["total"] == before["total"] + 1
    assert after["new"] == before["new"] + 1
    assert after["with_location"] == before["with_location"] + 1
    assert after["total"] == after["new"] + after["in_progress"] + after["resolved"]
    assert len(after["daily"]) == 14
    assert after["avg_rating"] is None
