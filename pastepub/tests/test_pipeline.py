from __future__ import annotations

from dataclasses import replace

import pytest

from pastepub.exceptions import InvalidName, PublishError, RenderError


def test_paste_end_to_end(make_pipeline, transport) -> None:
    result = make_pipeline().paste("print(1)", title="demo", mode="python")

    assert result.public_url == "https://p.example.org/demo.html"
    assert transport.files["/var/www/paste/demo"] == b"print(1)"
    rendered = transport.read("/var/www/paste/demo.html")
    assert '<a href="https://p.example.org/demo">original</a>' in rendered
    assert 'class="python"' in rendered


def test_paste_falls_back_to_file_name(make_pipeline, transport, highlighter) -> None:
    result = make_pipeline().paste(b"x = 1\n", title="", fallback="script.py")

    assert result.public_url == "https://p.example.org/script.py.html"
    assert highlighter.calls == [("x = 1\n", None, "script.py")]
    assert transport.files["/var/www/paste/script.py"] == b"x = 1\n"


def test_paste_percent_encodes_url_but_not_remote_name(make_pipeline, transport) -> None:
    result = make_pipeline().paste("text", title="my notes")

    assert result.public_url == "https://p.example.org/my%20notes.html"
    assert result.raw_url == "https://p.example.org/my%20notes"
    assert "/var/www/paste/my notes.html" in transport.files
    assert '<a href="https://p.example.org/my%20notes">original</a>' in transport.read("/var/www/paste/my notes.html")


def test_raw_bytes_are_uploaded_verbatim(make_pipeline, transport) -> None:
    payload = b"caf\xe9 latin-1\n"

    make_pipeline().paste(payload, title="latin")

    assert transport.files["/var/www/paste/latin"] == payload


def test_private_paste_carries_marker(make_pipeline) -> None:
    result = make_pipeline().paste("secret", title="keys", private=True)

    assert result.public_url == "https://p.example.org/keys-private.html"


def test_timestamp_name_style(make_pipeline, config, fixed_now) -> None:
    pipeline = make_pipeline(config=replace(config, name_style="timestamp"))

    result = pipeline.paste("x", title="log", published_at=fixed_now)

    assert result.public_url == "https://p.example.org/log-20240301123045.html"
    assert result.published_at == fixed_now


def test_unnamed_paste_is_rejected(make_pipeline, transport, highlighter) -> None:
    with pytest.raises(InvalidName):
        make_pipeline().paste("x", title="", fallback="")

    assert highlighter.calls == []
    assert transport.copies == []


def test_render_failure_stops_before_upload(make_pipeline, transport, highlighter) -> None:
    highlighter.error = ValueError("unknown mode")

    with pytest.raises(RenderError):
        make_pipeline().paste("x", title="demo", mode="nope")

    assert transport.copies == []


def test_rendered_upload_failure_returns_no_url(make_pipeline, transport) -> None:
    transport.fail_on = {"demo.html"}

    with pytest.raises(PublishError):
        make_pipeline().paste("print(1)", title="demo")

    assert "/var/www/paste/demo" not in transport.copies


def test_overlong_title_is_rejected_before_rendering(make_pipeline, transport, highlighter) -> None:
    with pytest.raises(InvalidName):
        make_pipeline().paste("x", title="a" * 300)

    assert highlighter.calls == []
    assert transport.copies == []


def test_private_paste_with_unsafe_marker_is_rejected(make_pipeline, config, transport) -> None:
    pipeline = make_pipeline(config=replace(config, privacy_marker="priv/ate"))

    with pytest.raises(InvalidName):
        pipeline.paste("x", title="demo", private=True)

    assert transport.copies == []


def test_empty_privacy_marker_disables_filtering(make_pipeline, config, transport) -> None:
    pipeline = make_pipeline(config=replace(config, privacy_marker=""))

    result = pipeline.paste("x", title="private-notes", private=True)
    document = pipeline.index_builder.build(["private-notes.html", "a.html"])

    assert result.public_url == "https://p.example.org/private-notes.html"
    assert [entry.filename for entry in document.entries] == ["private-notes.html", "a.html"]
