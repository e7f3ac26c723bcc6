"""Tests for autoroute.routes.filename — method and path template parsing."""

import pytest

from autoroute.routes.filename import (
    HTTP_METHODS,
    PathSegment,
    RouteTemplate,
    is_route_file,
    parse_filename,
    parse_route_segment,
)

# ---------------------------------------------------------------------------
# parse_filename — valid names
# ---------------------------------------------------------------------------


class TestParseFilenameValid:
    """Names following the method[-segment] convention."""

    @pytest.mark.parametrize("method", HTTP_METHODS)
    def test_method_only(self, method: str) -> None:
        result = parse_filename(f"{method}.py")
        assert result.valid
        assert result.method == method
        assert result.route_segment == ""
        assert result.template == RouteTemplate(method=method)
        assert result.template.path == ""

    def test_simple_literal(self) -> None:
        result = parse_filename("get-users.py")
        assert result.valid
        assert result.method == "get"
        assert result.route_segment == "users"
        assert result.template.path == "users"

    def test_single_param(self) -> None:
        result = parse_filename("get-[id].py")
        assert result.template.path == ":id"
        assert result.template.params == ("id",)

    def test_param_then_literal(self) -> None:
        assert parse_filename("get-[userId]-posts.py").template.path == ":userId/posts"

    def test_two_params(self) -> None:
        result = parse_filename("get-[userId]-[postId].py")
        assert result.template.path == ":userId/:postId"
        assert result.template.params == ("userId", "postId")

    def test_param_literal_param(self) -> None:
        result = parse_filename("put-[id]-profile-[section].py")
        assert result.template.path == ":id/profile/:section"

    def test_hyphenated_literal_kept(self) -> None:
        """Hyphens away from parameters stay inside the literal."""
        assert parse_filename("get-user-profile.py").template.path == "user-profile"

    def test_adjacent_params_share_segment(self) -> None:
        result = parse_filename("get-[a][b].py")
        assert result.template.path == ":a:b"
        assert result.template.params == ("a", "b")

    def test_literal_then_param_without_hyphen(self) -> None:
        result = parse_filename("get-users[id].py")
        assert result.template.path == "users:id"
        assert result.template.segments == (
            PathSegment("users"),
            PathSegment("id", is_param=True, attached=True),
        )

    def test_param_then_literal_without_hyphen(self) -> None:
        assert parse_filename("get-[id]users.py").template.path == ":idusers"

    def test_without_extension(self) -> None:
        result = parse_filename("post-login")
        assert result.valid
        assert result.template.path == "login"

    def test_segments_are_typed(self) -> None:
        result = parse_filename("get-[id]-posts.py")
        assert result.template.segments == (
            PathSegment("id", is_param=True),
            PathSegment("posts"),
        )


# ---------------------------------------------------------------------------
# parse_filename — invalid names
# ---------------------------------------------------------------------------


class TestParseFilenameInvalid:
    """Names that break the convention never raise."""

    def test_unknown_method(self) -> None:
        result = parse_filename("fetch-users.py")
        assert not result.valid
        assert "valid HTTP method" in result.error
        assert "get|post|put|delete|patch|head|options" in result.error

    def test_no_separator(self) -> None:
        """``getusers`` is not ``get-users``."""
        assert not parse_filename("getusers.py").valid

    def test_uppercase_method(self) -> None:
        assert not parse_filename("GET-users.py").valid

    def test_empty_param(self) -> None:
        result = parse_filename("get-[].py")
        assert not result.valid
        assert result.method == "get"
        assert result.error == "Empty parameters not allowed [], use [id] instead of []"

    def test_empty_param_after_literal(self) -> None:
        assert not parse_filename("get-users-[].py").valid


# ---------------------------------------------------------------------------
# parse_route_segment / is_route_file
# ---------------------------------------------------------------------------


class TestParseRouteSegment:

    def test_empty(self) -> None:
        assert parse_route_segment("") == ()

    def test_literal_only(self) -> None:
        assert parse_route_segment("users") == (PathSegment("users"),)

    def test_one_boundary_hyphen_consumed(self) -> None:
        """Only one hyphen on each side of a parameter is a boundary."""
        segments = parse_route_segment("[id]--posts")
        assert segments == (PathSegment("id", is_param=True), PathSegment("-posts"))


class TestIsRouteFile:

    def test_python_source(self) -> None:
        assert is_route_file("get-users.py")

    def test_stub_excluded(self) -> None:
        assert not is_route_file("get-users.pyi")

    def test_other_extensions(self) -> None:
        assert not is_route_file("get-users.txt")
        assert not is_route_file("get-users.pyc")
        assert not is_route_file("README.md")
