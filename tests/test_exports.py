"""Tests for autoroute.routes.exports — create_handler and export classification."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from autoroute._errors import RouteFileError
from autoroute.routes.exports import (
    FunctionExport,
    LegacyExport,
    RouteHandler,
    UnsupportedExport,
    WrappedExport,
    classify_export,
    create_handler,
    explicit_requires_auth,
)


async def _endpoint(request):
    return "ok"


# ---------------------------------------------------------------------------
# create_handler
# ---------------------------------------------------------------------------


class TestCreateHandler:

    def test_wraps_handler_and_meta(self) -> None:
        wrapped = create_handler(_endpoint, {"requires_auth": True})
        assert isinstance(wrapped, RouteHandler)
        assert wrapped.handler is _endpoint
        assert wrapped.meta == {"requires_auth": True}

    def test_no_meta(self) -> None:
        assert create_handler(_endpoint).meta is None

    def test_empty_meta_is_none(self) -> None:
        """An empty mapping is indistinguishable from no meta."""
        assert create_handler(_endpoint, {}).meta is None

    def test_meta_is_copied(self) -> None:
        meta = {"requires_auth": False}
        wrapped = create_handler(_endpoint, meta)
        meta["requires_auth"] = True
        assert wrapped.meta == {"requires_auth": False}

    def test_non_callable_rejected(self) -> None:
        with pytest.raises(TypeError, match="expects a callable"):
            create_handler("nope")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        wrapped = create_handler(_endpoint)
        with pytest.raises(AttributeError):
            wrapped.handler = _endpoint  # type: ignore[misc]


# ---------------------------------------------------------------------------
# classify_export
# ---------------------------------------------------------------------------


class TestClassifyExport:

    def test_function(self) -> None:
        assert classify_export(_endpoint) == FunctionExport(_endpoint)

    def test_callable_object(self) -> None:
        class View:
            def __call__(self, request):
                return "ok"

        view = View()
        assert classify_export(view) == FunctionExport(view)

    def test_wrapped(self) -> None:
        export = classify_export(create_handler(_endpoint, {"requires_auth": True}))
        assert export == WrappedExport(_endpoint, {"requires_auth": True})

    def test_legacy_mapping(self) -> None:
        export = classify_export({"handler": _endpoint, "meta": {"requires_auth": True}})
        assert export == LegacyExport(_endpoint, {"requires_auth": True})

    def test_legacy_mapping_empty_meta(self) -> None:
        assert classify_export({"handler": _endpoint, "meta": {}}).meta is None

    def test_legacy_object(self) -> None:
        export = classify_export(SimpleNamespace(handler=_endpoint))
        assert export == LegacyExport(_endpoint, None)

    def test_mapping_without_handler(self) -> None:
        export = classify_export({"meta": {}})
        assert isinstance(export, UnsupportedExport)
        assert export.reason == "Exported object must contain a handler function"

    def test_mapping_with_non_callable_handler(self) -> None:
        assert isinstance(classify_export({"handler": "x"}), UnsupportedExport)

    @pytest.mark.parametrize(("value", "type_name"), [("x", "str"), (1, "int"), (True, "bool")])
    def test_scalars(self, value: object, type_name: str) -> None:
        export = classify_export(value)
        assert export == UnsupportedExport(type_name, f"Unsupported export type: {type_name}")


# ---------------------------------------------------------------------------
# explicit_requires_auth
# ---------------------------------------------------------------------------


class TestExplicitRequiresAuth:

    def test_none_meta(self) -> None:
        assert explicit_requires_auth(None) is None

    def test_flag_absent(self) -> None:
        assert explicit_requires_auth({"tags": ["x"]}) is None

    def test_flag_none(self) -> None:
        assert explicit_requires_auth({"requires_auth": None}) is None

    @pytest.mark.parametrize("flag", [True, False])
    def test_flag_set(self, flag: bool) -> None:
        assert explicit_requires_auth({"requires_auth": flag}) is flag

    def test_non_bool_flag(self) -> None:
        with pytest.raises(RouteFileError, match="must be a bool"):
            explicit_requires_auth({"requires_auth": "yes"})

    def test_non_mapping_meta(self) -> None:
        with pytest.raises(RouteFileError, match="must be a mapping"):
            explicit_requires_auth(["requires_auth"])
