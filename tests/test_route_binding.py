# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for RouteBinding active matching and URL building."""

from __future__ import annotations

import pytest

from genro_menu import EvaluationPass, RouteBinding


@pytest.fixture
def evaluation(context):
    return EvaluationPass(context)


def _binding(name, params=None, glob=None):
    binding = RouteBinding(name)
    if params is not None:
        binding.set_params(params)
    if glob is not None:
        binding.add_active_glob(glob)
    return binding


class TestNameMatching:
    def test_equal_name_without_params_is_active(self, router, evaluation):
        router.navigate("dashboard")
        assert _binding("dashboard").is_active(evaluation)

    def test_equal_name_ignores_current_params_when_none_required(self, router, evaluation):
        router.navigate("users.show", id="3")
        assert _binding("users.show").is_active(evaluation)

    def test_different_name_is_inactive(self, router, evaluation):
        router.navigate("settings")
        assert not _binding("dashboard").is_active(evaluation)

    def test_name_mismatch_short_circuits_params(self, router, evaluation):
        router.navigate("settings", type="a")
        assert not _binding("reports", {"type": "a"}).is_active(evaluation)

    def test_unnamed_current_route_is_inactive(self, router, evaluation):
        router.navigate(None)
        assert not _binding("dashboard", glob="*").is_active(evaluation)

    def test_glob_fallback(self, router, evaluation):
        router.navigate("users.edit", id="1")
        assert _binding("users.index", glob="users.*").is_active(evaluation)
        assert not _binding("users.index", glob="accounts.*").is_active(evaluation)

    def test_glob_match_falls_through_to_params(self, router, evaluation):
        binding = _binding("reports", {"type": "a"}, glob="reports.*")
        router.navigate("reports.monthly", type="a")
        assert binding.is_active(evaluation)
        router.navigate("reports.monthly", type="b")
        assert not binding.is_active(evaluation)


class TestParamMatching:
    def test_optional_param_satisfied_by_absence(self, router, evaluation):
        router.navigate("reports")
        assert _binding("reports", {"type": None}).is_active(evaluation)

    def test_optional_param_rejects_present_value(self, router, evaluation):
        router.navigate("reports", type="x")
        assert not _binding("reports", {"type": None}).is_active(evaluation)

    def test_required_param_must_be_equal(self, router, evaluation):
        router.navigate("reports", type="b")
        assert not _binding("reports", {"type": "a"}).is_active(evaluation)
        router.navigate("reports", type="a")
        assert _binding("reports", {"type": "a"}).is_active(evaluation)

    def test_required_param_missing_is_inactive(self, router, evaluation):
        router.navigate("reports")
        assert not _binding("reports", {"type": "a"}).is_active(evaluation)

    def test_unrelated_current_params_are_ignored(self, router, evaluation):
        router.navigate("reports", type="a", page="2")
        assert _binding("reports", {"type": "a"}).is_active(evaluation)

    def test_set_params_merges_or_replaces(self):
        binding = _binding("reports", {"type": "a"})
        binding.set_params({"year": "2024"})
        assert binding.params == {"type": "a", "year": "2024"}
        binding.set_params({"month": "1"}, replace=True)
        assert binding.params == {"month": "1"}


class TestParamExtractor:
    def test_extracted_values_take_part_in_matching(self, router, evaluation):
        binding = _binding("users.index", {"tab": "active"})
        binding.set_param_extractor(lambda params: {"tab": "active"})
        router.navigate("users.index", locale="en")
        assert binding.is_active(evaluation)

    def test_extracted_values_never_override_router_values(self, router, evaluation):
        binding = _binding("users.index", {"tab": "active"})
        binding.set_param_extractor(lambda params: {"tab": "active"})
        router.navigate("users.index", tab="archived")
        assert not binding.is_active(evaluation)

    def test_extractor_receives_current_params(self, router, evaluation):
        seen = []
        binding = _binding("users.index", {"tab": None})
        binding.set_param_extractor(lambda params: seen.append(params))
        router.navigate("users.index", locale="en")
        assert binding.is_active(evaluation)
        assert seen == [{"locale": "en"}]

    def test_extractor_runs_once_per_pass(self, router, context):
        calls = []

        def extractor(params):
            calls.append(params)
            return {"tab": "active"}

        binding = _binding("users.index", {"tab": "active"})
        binding.set_param_extractor(extractor)
        router.navigate("users.index")

        first = EvaluationPass(context)
        assert binding.is_active(first)
        assert binding.is_active(first)
        assert len(calls) == 1

        assert binding.is_active(EvaluationPass(context))
        assert len(calls) == 2

    def test_extractor_not_run_without_explicit_params(self, router, evaluation):
        calls = []
        binding = _binding("users.index")
        binding.set_param_extractor(lambda params: calls.append(params))
        router.navigate("users.index")
        assert binding.is_active(evaluation)
        assert calls == []

    def test_extractor_must_be_callable(self):
        with pytest.raises(TypeError):
            _binding("users.index").set_param_extractor("tab")  # type: ignore[arg-type]


class TestUrlBuilding:
    def test_inherits_declared_params_only(self, router, evaluation):
        router.navigate("users.index", locale="en", q="smith")
        assert _binding("users.show", {"id": "5"}).build_params(evaluation) == {
            "locale": "en",
            "id": "5",
        }

    def test_explicit_params_win(self, router, evaluation):
        router.navigate("users.show", locale="en", id="7")
        binding = _binding("users.show", {"locale": "it"})
        assert binding.build_params(evaluation) == {"locale": "it", "id": "7"}

    def test_explicit_none_drops_inherited_value(self, router, evaluation):
        router.navigate("users.show", locale="en", id="7")
        binding = _binding("users.edit", {"id": None, "tab": None})
        assert binding.build_params(evaluation) == {"locale": "en"}

    def test_href_delegates_to_router(self, router, evaluation):
        router.navigate("users.index", locale="en")
        binding = _binding("users.show", {"id": "5"})
        assert binding.href(evaluation) == "/users/show?id=5&locale=en"
        assert binding.href(evaluation, absolute=True).startswith("http://example.test/")

    def test_href_without_name_is_placeholder(self, evaluation):
        assert RouteBinding(None).href(evaluation) == "#"
        assert RouteBinding(None, placeholder="javascript:;").href(evaluation) == "javascript:;"


class TestValidity:
    def test_known_route_is_valid(self, evaluation):
        assert _binding("dashboard").is_valid(evaluation)

    def test_unknown_route_is_invalid(self, evaluation):
        assert not _binding("nope").is_valid(evaluation)

    def test_unnamed_binding_is_invalid(self, evaluation):
        assert not RouteBinding(None).is_valid(evaluation)

    def test_unknown_route_is_never_active(self, router, evaluation):
        router.navigate("dashboard")
        assert not _binding("nope").is_active(evaluation)
