import pytest

from req.errors import UsageError
from req.schemas import USER_AGENT, Draft, EncodedBody, Environment, Format, split_path


class TestSplitPath:
    """Test cases for path prefix splitting."""

    def test_outer_slashes_trimmed(self):
        """Test that leading and trailing slashes are dropped."""
        assert split_path("/example/movies/") == ["example", "movies"]

    def test_empty_path_gives_one_empty_segment(self):
        """Test the known boundary for an empty path."""
        assert split_path("") == [""]
        assert split_path("/") == [""]


class TestDraft:
    """Test cases for the request draft model."""

    def test_defaults(self):
        """Test the draft defaults."""
        draft = Draft()

        assert draft.scheme == "http"
        assert draft.host == ""
        assert draft.method == ""
        assert draft.path == [""]
        assert dict(draft.headers) == {"User-Agent": USER_AGENT}
        assert draft.body == {}
        assert draft.files == {}
        assert draft.format is None
        assert draft.debug is False

    def test_method_uppercased_on_assignment(self):
        """Test that the method is upper-cased however it is set."""
        draft = Draft(method="get")
        assert draft.method == "GET"

        draft.method = "patch"
        assert draft.method == "PATCH"

    def test_headers_not_shared_between_drafts(self):
        """Test that each draft gets its own header map."""
        first, second = Draft(), Draft()
        first.set_header("X-One", "1")

        assert "X-One" not in second.headers

    def test_add_header_strips_whitespace(self):
        """Test that header name and value are trimmed."""
        draft = Draft()
        draft.add_header("  Accept :  text/html ")

        assert draft.headers["Accept"] == "text/html"

    def test_add_header_keeps_colons_in_value(self):
        """Test that only the first colon separates name and value."""
        draft = Draft()
        draft.add_header("Referer: http://example.com:8080/")

        assert draft.headers["Referer"] == "http://example.com:8080/"

    def test_add_header_empty_name_raises(self):
        """Test that a header with no name is rejected."""
        with pytest.raises(UsageError) as exc_info:
            Draft().add_header(": value")

        assert "is invalid" in str(exc_info.value)

    def test_format_parse(self):
        """Test format parsing."""
        assert Format.parse("json") is Format.JSON
        assert Format.parse("form") is Format.FORM

        with pytest.raises(UsageError):
            Format.parse("JSON")


class TestEnvironment:
    """Test cases for startup defaults."""

    def test_from_empty_environment(self):
        """Test defaults when no REQ_* variables are set."""
        env = Environment.from_env({})

        assert env.host == ""
        assert env.path == ""
        assert env.format is None
        assert env.log_level == "ERROR"

    def test_seeds_new_draft(self):
        """Test that the environment seeds host, path and format."""
        env = Environment.from_env({
            "REQ_HOST": "api.example.com",
            "REQ_PATH": "/v1/movies/",
            "REQ_FORMAT": "form",
            "REQ_LOG_LEVEL": "debug",
        })
        draft = env.new_draft()

        assert draft.host == "api.example.com"
        assert draft.path == ["v1", "movies"]
        assert draft.format is Format.FORM
        assert env.log_level == "DEBUG"

    def test_captured_once(self):
        """Test that later environment changes are not seen."""
        environ = {"REQ_HOST": "first.example.com"}
        env = Environment.from_env(environ)
        environ["REQ_HOST"] = "second.example.com"

        assert env.new_draft().host == "first.example.com"

    def test_invalid_format_raises(self):
        """Test that an unknown REQ_FORMAT is a usage error."""
        with pytest.raises(UsageError) as exc_info:
            Environment.from_env({"REQ_FORMAT": "xml"})

        assert str(exc_info.value) == 'unknown format "xml"'


class TestEncodedBody:
    """Test cases for the encoded body container."""

    def test_empty(self):
        """Test that a body without content is empty."""
        assert EncodedBody().is_empty
        assert not EncodedBody(content=b"{}", content_type="application/json").is_empty
