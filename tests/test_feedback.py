"""
Tests for citizen ratings of resolved reports, kept in a browser cookie
"""
import pytest

from civic_reports.preferences import FEEDBACK_COOKIE


@pytest.fixture
def resolved_code(client, submit, login):
    """Tracking code of a report an admin has resolved; the client ends signed out."""
    code = submit(title="Mbeturina në park")["tracking_code"]
    report_id = client.get(f"/api/public/reports/{code}").json()["id"]

    login()
    response = client.post(f"/api/reports/{report_id}/status", json={
        "status": "resolved", "note": "Mbeturinat u pastruan",
    })
    assert response.status_code == 200
    client.cookies.clear()
    return code


def test_resolved_report_shows_rating_form(client, resolved_code):
    response = client.get("/track", params={"code": resolved_code})
    assert 'action="/track/feedback"' in response.text
    assert "Mbeturinat u pastruan" in response.text


def test_unresolved_report_has_no_rating_form(client, submit):
    code = submit()["tracking_code"]
    response = client.get("/track", params={"code": code})
    assert 'action="/track/feedback"' not in response.text


def test_rating_is_stored_once(client, resolved_code):
    response = client.post("/track/feedback", data={"code": resolved_code, "rating": "5", "comment": "Shumë shpejt"})
    assert response.status_code == 200
    assert "Faleminderit për vlerësimin!" in response.text
    assert 'aria-label="5/5"' in response.text
    assert client.cookies.get(FEEDBACK_COOKIE)

    # A second rating for the same report is ignored
    response = client.post("/track/feedback", data={"code": resolved_code, "rating": "1"})
    assert 'aria-label="5/5"' in response.text
    assert "Shumë shpejt" in response.text


def test_ratings_feed_average_in_statistics(client, resolved_code):
    client.post("/track/feedback", data={"code": resolved_code, "rating": "4"})
    assert client.get("/api/public/stats").json()["avg_rating"] == 4.0


def test_rating_out_of_range_rejected(client, resolved_code):
    response = client.post("/track/feedback", data={"code": resolved_code, "rating": "9"})
    assert "Ju lutem zgjidhni një vlerësim" in response.text
    assert client.cookies.get(FEEDBACK_COOKIE) is None


def test_rating_unresolved_report_ignored(client, submit):
    code = submit()["tracking_code"]
    response = client.post("/track/feedback", data={"code": code, "rating": "5"}, follow_redirects=False)
    assert response.status_code == 303
    assert client.cookies.get(FEEDBACK_COOKIE) is None


def test_rating_is_private_to_the_browser(client, resolved_code):
    client.post("/track/feedback", data={"code": resolved_code, "rating": "3"})
    client.cookies.clear()
    response = client.get("/track", params={"code": resolved_code})
    assert 'action="/track/feedback"' in response.text
