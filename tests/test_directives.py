from __future__ import annotations

import pytest

from docsync.templates.directives import is_truthy, resolve_directives, resolve_one_pass
from docsync.templates.substitution import ValueSlots


class TestTruthiness:
    @pytest.mark.parametrize("value", [0, 0.0, "x", [1], {}, {"a": 1}, True])
    def test_truthy_values(self, value: object) -> None:
        assert is_truthy(value)

    @pytest.mark.parametrize("value", [None, False, "", [], ()])
    def test_falsy_values(self, value: object) -> None:
        assert not is_truthy(value)


class TestConditionals:
    def test_if_without_else(self) -> None:
        content = "{{#if x}}body{{/if}}"
        assert resolve_directives(content, {"x": "yes"}) == "body"
        assert resolve_directives(content, {"x": ""}) == ""
        assert resolve_directives(content, {}) == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "a"), ("", "b"), ([], "b"), ([1], "a"), (None, "b"), (False, "b")],
    )
    def test_if_else_branch_selection(self, value: object, expected: str) -> None:
        assert resolve_directives("{{#if X}}a{{else}}b{{/if}}", {"X": value}) == expected

    def test_missing_variable_takes_else_branch(self) -> None:
        assert resolve_directives("{{#if X}}a{{else}}b{{/if}}", {}) == "b"

    def test_surrounding_text_is_preserved(self) -> None:
        content = "before {{#if x}}in{{/if}} after"
        assert resolve_directives(content, {"x": True}) == "before in after"

    def test_else_aware_and_plain_resolved_in_one_pass(self) -> None:
        content = "{{#if a}}A{{/if}}{{#if b}}B{{else}}C{{/if}}"
        assert resolve_one_pass(content, {"a": True, "b": False}) == "AC"

    def test_nested_else_belongs_to_inner_tag(self) -> None:
        content = "{{#if a}}{{#if b}}x{{else}}y{{/if}}{{/if}}"
        assert resolve_directives(content, {"a": False, "b": False}) == ""
        assert resolve_directives(content, {"a": True, "b": False}) == "y"
        assert resolve_directives(content, {"a": True, "b": True}) == "x"

    def test_chosen_branch_not_reprocessed_in_same_pass(self) -> None:
        content = "{{#if a}}{{#if b}}{{#if c}}deep{{/if}}{{/if}}{{/if}}"
        variables = {"a": True, "b": True, "c": True}
        assert resolve_one_pass(content, variables) == "{{#if b}}{{#if c}}deep{{/if}}{{/if}}"
        assert resolve_directives(content, variables) == "deep"

    def test_unclosed_conditional_left_untouched(self) -> None:
        content = "{{#if a}}never closed"
        assert resolve_directives(content, {"a": True}) == content

    def test_unclosed_conditional_does_not_block_later_directives(self) -> None:
        content = "{{#if a}}x {{#each xs}}{{this}}{{/each}}"
        assert resolve_directives(content, {"a": True, "xs": [1]}) == "{{#if a}}x 1"


class TestIterations:
    def test_primitives_concatenate(self) -> None:
        content = "{{#each items}}{{this}}{{/each}}"
        assert resolve_directives(content, {"items": [1, 2, 3]}) == "123"
        assert resolve_directives(content, {"items": []}) == ""

    @pytest.mark.parametrize("items", [None, "abc", 5, {"a": 1}])
    def test_non_sequences_resolve_to_empty(self, items: object) -> None:
        content = "[{{#each items}}{{this}}{{/each}}]"
        assert resolve_directives(content, {"items": items}) == "[]"

    def test_missing_variable_resolves_to_empty(self) -> None:
        assert resolve_directives("{{#each items}}{{this}}{{/each}}", {}) == ""

    def test_index_placeholder_is_zero_based(self) -> None:
        content = "{{#each xs}}{{@index}}:{{this}},{{/each}}"
        assert resolve_directives(content, {"xs": ["a", "b"]}) == "0:a,1:b,"

    def test_record_fields_are_exposed(self) -> None:
        content = "{{#each users}}{{name}}={{age}};{{/each}}"
        users = [{"name": "ann", "age": 3}, {"name": "bob", "age": 0}]
        assert resolve_directives(content, {"users": users}) == "ann=3;bob=0;"

    def test_unknown_record_field_stays_literal(self) -> None:
        content = "{{#each xs}}{{missing}}{{/each}}"
        assert resolve_directives(content, {"xs": [{"a": 1}]}) == "{{missing}}"

    def test_tuple_is_a_sequence(self) -> None:
        assert resolve_directives("{{#each xs}}{{this}}{{/each}}", {"xs": ("p", "q")}) == "pq"


class TestNesting:
    def test_each_inside_if_resolves_within_two_passes(self) -> None:
        content = "{{#if outer}}{{#each list}}{{this}}{{/each}}{{/if}}"
        variables = {"outer": True, "list": ["a", "b"]}
        assert resolve_directives(content, variables, max_passes=2) == "ab"

    def test_conditionals_inside_loops_see_element_fields_first(self) -> None:
        content = "{{#each items}}{{#if flag}}{{name}}{{/if}}{{/each}}"
        variables = {"flag": True, "items": [{"name": "x", "flag": False}, {"name": "y"}]}
        assert resolve_directives(content, variables) == "y"

    def test_budget_exhaustion_returns_partial_result(self) -> None:
        content = "{{#if a}}{{#if a}}{{#if a}}done{{/if}}{{/if}}{{/if}}"
        partial = resolve_directives(content, {"a": True}, max_passes=1)
        assert partial == "{{#if a}}{{#if a}}done{{/if}}{{/if}}"
        assert resolve_directives(content, {"a": True}, max_passes=3) == "done"

    def test_fixed_point_is_idempotent(self) -> None:
        content = "{{#if a}}{{#each xs}}<{{this}}>{{/each}}{{else}}none{{/if}}"
        variables = {"a": [1], "xs": ["m", "n"]}
        once = resolve_directives(content, variables)
        assert once == "<m><n>"
        assert resolve_directives(once, variables) == once

    def test_rejects_non_positive_budget(self) -> None:
        with pytest.raises(ValueError, match="max_passes"):
            resolve_directives("x", {}, max_passes=0)


class TestLoopScope:
    def test_missing_field_is_left_for_outer_substitution(self) -> None:
        content = "{{#each xs}}{{label}}:{{this.label}};{{/each}}"
        variables = {"label": "outer", "xs": [{"label": "own"}, {}]}
        assert resolve_directives(content, variables) == "own:own;{{label}}:;"

    def test_reserved_names_are_not_taken_from_elements(self) -> None:
        content = "{{#each xs}}{{timestamp}}|{{version}}|{{source}}{{/each}}"
        variables = {"xs": [{"timestamp": "FAKE", "version": "0", "source": "data"}]}
        assert resolve_directives(content, variables) == "{{timestamp}}|{{version}}|{{source}}"

    def test_element_values_are_not_read_as_markup(self) -> None:
        content = "{{#each xs}}{{this}}|{{/each}}"
        variables = {
            "xs": ["{{secret}}", "{{#if flag}}yes{{/if}}", "{{/each}}"],
            "secret": "LEAK",
            "flag": True,
        }
        expected = "{{secret}}|{{#if flag}}yes{{/if}}|{{/each}}|"
        assert resolve_directives(content, variables) == expected

    def test_record_values_are_not_read_as_markup(self) -> None:
        content = "{{#each xs}}{{note}}{{/each}} tail {{/if}}"
        variables = {"xs": [{"note": "{{#if off}}"}]}
        assert resolve_directives(content, variables) == "{{#if off}} tail {{/if}}"

    def test_element_values_held_for_caller(self) -> None:
        slots = ValueSlots()
        content = resolve_directives(
            "{{#each xs}}{{this}}{{/each}}", {"xs": ["{{a}}"]}, slots=slots
        )
        assert "{{" not in content
        assert slots.restore(content) == "{{a}}"

    def test_nested_loops_keep_their_own_index(self) -> None:
        content = "{{#each a}}{{#each b}}{{@index}}{{/each}}{{/each}}"
        assert resolve_directives(content, {"a": [1, 2], "b": ["x", "y"]}) == "0101"

    def test_outer_index_outside_inner_loop(self) -> None:
        content = "{{#each a}}{{@index}}:{{#each b}}{{@index}}{{/each}};{{/each}}"
        assert resolve_directives(content, {"a": ["p", "q"], "b": ["x", "y"]}) == "0:01;1:01;"

    def test_inner_loop_iterates_element_field(self) -> None:
        content = "{{#each apis}}{{name}}({{#each parameters}}{{name}}{{/each}}) {{/each}}"
        apis = [
            {"name": "get", "parameters": [{"name": "id"}, {"name": "fields"}]},
            {"name": "list", "parameters": []},
        ]
        assert resolve_directives(content, {"apis": apis}) == "get(idfields) list() "

    def test_inner_loop_reads_enclosing_element_fields(self) -> None:
        content = "{{#each apis}}{{#each this.parameters}}{{path}}?{{this.name}} {{/each}}{{/each}}"
        apis = [{"path": "/users", "parameters": [{"name": "id"}]}]
        assert resolve_directives(content, {"apis": apis}) == "/users?id "

    def test_element_prefix_never_falls_through(self) -> None:
        content = "{{#each xs}}[{{#if this.note}}{{this.note}}{{else}}none{{/if}}]{{/each}}"
        variables = {"note": "outer", "xs": [{"note": "n"}, {}, "plain"]}
        assert resolve_directives(content, variables) == "[n][none][none]"
