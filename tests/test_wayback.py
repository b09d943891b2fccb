import logging

import pytest

from waybackprobe import (
    DEFAULT_USER_AGENT,
    CaptureRecord,
    DiscoveryMode,
    Outcome,
    RequestError,
    URLConstructionError,
    WaybackClient,
    get_wayback_data,
)
from waybackprobe import wayback

TARGET = "http://www.bbc.co.uk/news"
FIRST = "http://web.archive.org/web/19961221203254/http://www.bbc.co.uk/news"
LAST = "http://web.archive.org/web/20200101000000/http://www.bbc.co.uk/news"
LINK = f'<{FIRST}>; rel="first memento", <{LAST}>; rel="last memento"'


def test_already_archived_makes_no_request(fake_session):
    session = fake_session()
    record = WaybackClient(session=session).resolve(FIRST)
    assert record.already_archived
    assert record.outcome is Outcome.ALREADY_ARCHIVED
    assert record.reason == wayback.ALREADY_ARCHIVED_REASON
    assert record.save_url == "http://web.archive.org/save/" + FIRST
    assert record.earliest_capture_url is None
    assert record.response_code is None
    assert session.calls == []


def test_not_in_archive(fake_session, fake_response):
    session = fake_session(fake_response(404, "Not Found"))
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.not_in_archive
    assert not record.already_archived
    assert record.earliest_capture_url is None
    assert record.latest_capture_url is None
    assert record.response_code == 404
    assert record.response_text == "Not Found"
    assert record.save_url == "http://web.archive.org/save/" + TARGET
    assert len(session.calls) == 1


def test_link_header_resolves_in_one_probe(fake_session, fake_response):
    session = fake_session(fake_response(302, "Found", {"Link": LINK, "Location": FIRST}))
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.outcome is Outcome.FRESH
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url == LAST
    assert record.response_code == 302
    assert record.save_url == "http://web.archive.org/save/" + TARGET
    assert len(session.calls) == 1


def test_probe_request_shape(fake_session, fake_response):
    session = fake_session(fake_response(302, "Found", {"Link": LINK}))
    WaybackClient(session=session).resolve(TARGET)
    method, url, kwargs = session.calls[0]
    assert method == "HEAD"
    assert url == "http://web.archive.org/web/19000831231300/" + TARGET
    assert kwargs["allow_redirects"] is False
    assert kwargs["timeout"] == 10
    assert kwargs["headers"] == {"User-Agent": DEFAULT_USER_AGENT, "Accept": "*/*"}


def test_custom_user_agent(fake_session, fake_response):
    session = fake_session(fake_response(302, "Found", {"Link": LINK}))
    WaybackClient(user_agent="my-tool/1.0", session=session).resolve(TARGET)
    assert session.calls[0][2]["headers"]["User-Agent"] == "my-tool/1.0"


def test_location_headers_take_two_probes(fake_session, fake_response):
    session = fake_session(
        fake_response(302, "Found", {"Location": FIRST}),
        fake_response(302, "Found", {"Location": LAST}),
    )
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url == LAST
    assert len(session.calls) == 2
    assert "/web/19000831231300/" in session.calls[0][1]
    assert "/web/19000831231300/" not in session.calls[1][1]
    assert record.response_code == 302


def test_404_with_location_is_not_terminal(fake_session, fake_response):
    session = fake_session(
        fake_response(404, "Not Found", {"Location": FIRST}),
        fake_response(302, "Found", {"Location": LAST}),
    )
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.outcome is Outcome.FRESH
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url == LAST


def test_link_mode_ignores_location(fake_session, fake_response):
    session = fake_session(fake_response(404, "Not Found", {"Location": FIRST}))
    record = WaybackClient(discovery=DiscoveryMode.LINK, session=session).resolve(TARGET)
    assert record.not_in_archive
    assert len(session.calls) == 1


def test_location_mode_ignores_link(fake_session, fake_response):
    session = fake_session(
        fake_response(302, "Found", {"Link": LINK, "Location": FIRST}),
        fake_response(302, "Found", {"Location": LAST}),
    )
    record = WaybackClient(discovery="location", session=session).resolve(TARGET)
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url == LAST
    assert len(session.calls) == 2


def test_transport_error_is_wrapped(fake_session, connection_error):
    session = fake_session(connection_error)
    with pytest.raises(RequestError) as excinfo:
        WaybackClient(session=session).resolve(TARGET)
    assert excinfo.value.__cause__ is connection_error
    assert "19000831231300" in excinfo.value.url


def test_bad_target_url(fake_session):
    session = fake_session()
    with pytest.raises(URLConstructionError):
        WaybackClient(session=session).resolve("http://example.com/%zz")
    assert session.calls == []


def test_record_is_immutable(fake_session, fake_response):
    session = fake_session(fake_response(404, "Not Found"))
    record = WaybackClient(session=session).resolve(TARGET)
    with pytest.raises(AttributeError):
        record.save_url = "changed"


def test_record_to_dict():
    record = CaptureRecord(url=TARGET, outcome=Outcome.NOT_IN_ARCHIVE, save_url="s", response_code=404)
    data = record.to_dict()
    assert data["outcome"] == "not_in_archive"
    assert data["response_code"] == 404
    assert data["earliest_capture_url"] is None


def test_get_wayback_data_closes_session(monkeypatch, fake_session, fake_response):
    session = fake_session(fake_response(302, "Found", {"Link": LINK}))
    monkeypatch.setattr(wayback.requests, "Session", lambda: session)
    record = get_wayback_data(TARGET, user_agent="my-tool/1.0")
    assert record.latest_capture_url == LAST
    assert session.closed


def test_version_is_default_agent():
    from waybackprobe import __version__, version
    assert version() == DEFAULT_USER_AGENT == f"waybackprobe/{__version__}"


def test_404_with_link_but_no_mementos_is_not_in_archive(fake_session, fake_response):
    link = (
        f'<{TARGET}>; rel="original", '
        f'<http://web.archive.org/web/timemap/link/{TARGET}>; rel="timemap"; type="application/link-format"'
    )
    session = fake_session(fake_response(404, "Not Found", {"Link": link}))
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.outcome is Outcome.NOT_IN_ARCHIVE
    assert record.earliest_capture_url is None
    assert record.latest_capture_url is None
    assert len(session.calls) == 1


def test_answer_naming_no_captures_is_not_in_archive(fake_session, fake_response):
    session = fake_session(
        fake_response(200, "OK"),
        fake_response(200, "OK"),
    )
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.outcome is Outcome.NOT_IN_ARCHIVE
    assert record.response_code == 200
    assert len(session.calls) == 2


def test_link_mode_without_mementos_is_not_in_archive(fake_session, fake_response):
    session = fake_session(fake_response(200, "OK", {"Link": f'<{TARGET}>; rel="original"'}))
    record = WaybackClient(discovery=DiscoveryMode.LINK, session=session).resolve(TARGET)
    assert record.not_in_archive
    assert len(session.calls) == 1


def test_partial_link_header_falls_back_to_latest_lookup(fake_session, fake_response):
    session = fake_session(
        fake_response(302, "Found", {"Link": f'<{FIRST}>; rel="first memento"', "Location": FIRST}),
        fake_response(302, "Found", {"Location": LAST}),
    )
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.outcome is Outcome.FRESH
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url == LAST
    assert len(session.calls) == 2
    assert "/web/19000831231300/" not in session.calls[1][1]


def test_link_without_first_uses_location_for_earliest(fake_session, fake_response):
    session = fake_session(
        fake_response(302, "Found", {"Link": f'<{LAST}>; rel="last memento"', "Location": FIRST}),
    )
    record = WaybackClient(session=session).resolve(TARGET)
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url == LAST
    assert len(session.calls) == 1


def test_single_capture_link_mode_leaves_latest_unset(fake_session, fake_response):
    session = fake_session(fake_response(302, "Found", {"Link": f'<{FIRST}>; rel="first last memento"'}))
    record = WaybackClient(discovery=DiscoveryMode.LINK, session=session).resolve(TARGET)
    assert record.outcome is Outcome.FRESH
    assert record.earliest_capture_url == FIRST
    assert record.latest_capture_url is None
    assert len(session.calls) == 1


def test_link_relations_are_logged(caplog, fake_session, fake_response):
    caplog.set_level(logging.DEBUG, logger="waybackprobe.wayback")
    session = fake_session(fake_response(302, "Found", {"Link": LINK}))
    WaybackClient(session=session).resolve(TARGET)
    assert "'first': " in caplog.text
    assert "'last': " in caplog.text
