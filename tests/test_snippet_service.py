from visitlogger.services import snippet_service


def test_script_url_encodes_params():
    url = snippet_service.script_url("https://visits.example.com/", "abc", "owner 1&x")

    assert url == "https://visits.example.com/track.js?scriptId=abc&userId=owner+1%26x"


def test_render_tracker_escapes_identifiers():
    source = snippet_service.render_tracker("https://visits.example.com", 'a"; alert(1); "', "</script>")

    assert 'const scriptId = "a\\"; alert(1); \\"";' in source
    assert "</script>" not in source
    assert '"https://visits.example.com/track"' in source
    assert '"https://ipapi.co/json/"' in source


def test_render_inline_tag():
    tag = snippet_service.render_inline_tag("https://visits.example.com", "abc", "owner-1")

    assert tag.startswith("<script>")
    assert tag.endswith("</script>")
    assert 'const userId = "owner-1";' in tag
