"""Tests for the evaluation engine module."""

import operator
from collections.abc import Callable
from typing import Any

import pytest

from wiregraph import (
    Name,
    UnboundVariablesError,
    compile_and_execute,
    compile_graph,
    execute_graph,
    free_variables,
)
from wiregraph._eval_engine import resolve_args

A, B, C, D, E = (Name(None, s) for s in "abcde")


def increment(x: int) -> int:
    return x + 1


def add(*xs: int) -> int:
    return sum(xs)


@pytest.fixture
def table() -> dict:
    return {
        "c": (["a", "b"], operator.mul),
        "d": (["c"], increment),
        "e": (["a", "c", "d"], add),
    }


def recording(calls: list[Name], name: Name, fn: Callable[..., Any]) -> Callable[..., Any]:
    def wrapper(*args: Any) -> Any:
        calls.append(name)
        return fn(*args)

    return wrapper


class TestFreeVariables:
    def test_without_bindings(self, table: dict) -> None:
        assert free_variables(compile_graph(table)) == frozenset({A, B})

    def test_bindings_remove_names(self, table: dict) -> None:
        graph = compile_graph(table)
        assert free_variables(graph, {"a": 1}) == frozenset({B})
        assert free_variables(graph, {A: 1, B: 2}) == frozenset()

    def test_extra_bindings_are_ignored(self, table: dict) -> None:
        graph = compile_graph(table)
        assert free_variables(graph, {"a": 1, "b": 2, "zzz": 3}) == frozenset()

    def test_unreferenced_names_are_not_free(self) -> None:
        graph = compile_graph({"k": ([], lambda: 1)})
        assert free_variables(graph) == frozenset()

    def test_declared_node_without_dependencies_is_not_free(self) -> None:
        graph = compile_graph({"k": ([], lambda: 1), "m": (["k"], increment)})
        assert free_variables(graph) == frozenset()

    def test_namespaced_names(self) -> None:
        graph = compile_graph({"foo/c": (["foo/a", "bar/a"], operator.add)})
        assert free_variables(graph) == frozenset({Name("foo", "a"), Name("bar", "a")})


class TestExecuteGraph:
    def test_computes_every_node(self, table: dict) -> None:
        results = execute_graph(compile_graph(table), {"a": 15, "b": 3})
        assert results == {A: 15, B: 3, C: 45, D: 46, E: 106}

    def test_binding_overrides_declared_node(self, table: dict) -> None:
        calls: list[Name] = []
        table["c"] = (["a", "b"], recording(calls, C, operator.mul))

        results = execute_graph(compile_graph(table), {"a": 15, "b": 3, "c": 20})

        assert results == {A: 15, B: 3, C: 20, D: 21, E: 56}
        assert C not in calls

    def test_missing_binding_raises(self, table: dict) -> None:
        with pytest.raises(UnboundVariablesError) as exc_info:
            execute_graph(compile_graph(table), {"a": 15})
        assert exc_info.value.names == frozenset({B})

    def test_reports_all_missing_names(self, table: dict) -> None:
        with pytest.raises(UnboundVariablesError, match=r"\{a, b\}") as exc_info:
            execute_graph(compile_graph(table), {})
        assert exc_info.value.names == frozenset({A, B})

    def test_no_function_called_when_unbound(self) -> None:
        calls: list[Name] = []
        graph = compile_graph(
            {
                "c": (["a"], recording(calls, C, increment)),
                "d": (["b"], recording(calls, D, increment)),
            },
        )
        with pytest.raises(UnboundVariablesError):
            execute_graph(graph, {"a": 1})
        assert calls == []

    def test_each_node_evaluated_once_after_its_dependencies(self, table: dict) -> None:
        calls: list[Name] = []
        graph = compile_graph(
            {
                key: (deps, recording(calls, Name.parse(key), fn))
                for key, (deps, fn) in table.items()
            },
        )

        execute_graph(graph, {"a": 15, "b": 3})

        assert calls == [C, D, E]

    def test_dependencies_passed_in_declared_order(self) -> None:
        results = execute_graph(
            compile_graph({"d": (["b", "a"], operator.sub)}),
            {"a": 1, "b": 10},
        )
        assert results[D] == 9

    def test_does_not_mutate_bindings(self, table: dict) -> None:
        bindings = {A: 15, B: 3}
        execute_graph(compile_graph(table), bindings)
        assert bindings == {A: 15, B: 3}

    def test_graph_is_reusable(self, table: dict) -> None:
        graph = compile_graph(table)
        first = execute_graph(graph, {"a": 15, "b": 3})
        second = execute_graph(graph, {"a": 1, "b": 1})
        assert first[E] == 106
        assert second[E] == 1 + 1 + 2

    def test_repeated_execution_gives_same_result(self, table: dict) -> None:
        graph = compile_graph(table)
        assert execute_graph(graph, {"a": 2, "b": 5}) == execute_graph(graph, {"a": 2, "b": 5})

    def test_node_without_dependencies(self) -> None:
        results = execute_graph(compile_graph({"k": ([], lambda: 42), "m": (["k"], increment)}))
        assert results == {Name(None, "k"): 42, Name(None, "m"): 43}

    def test_extra_bindings_are_kept(self, table: dict) -> None:
        results = execute_graph(compile_graph(table), {"a": 1, "b": 1, "unused": "x"})
        assert results[Name(None, "unused")] == "x"

    def test_node_errors_propagate_unchanged(self) -> None:
        error = ZeroDivisionError("boom")

        def fail(_: int) -> int:
            raise error

        with pytest.raises(ZeroDivisionError) as exc_info:
            execute_graph(compile_graph({"c": (["a"], fail)}), {"a": 1})
        assert exc_info.value is error

    def test_namespaced_graph(self) -> None:
        results = execute_graph(
            compile_graph({"foo/c": (["foo/a", "foo/b"], operator.mul)}),
            {"foo/a": 2, "foo/b": 4},
        )
        assert results[Name("foo", "c")] == 8


class TestCompileAndExecute:
    def test_one_step(self, table: dict) -> None:
        results = compile_and_execute(table, {"a": 15, "b": 3})
        assert results[E] == 106


class TestResolveArgs:
    def test_in_order(self) -> None:
        assert resolve_args({A: 1, B: 2}, [B, A]) == [2, 1]

    def test_missing_value_is_an_invariant_violation(self) -> None:
        with pytest.raises(AssertionError, match="'b'"):
            resolve_args({A: 1}, [A, B])
