"""A small arithmetic graph.

Run it directly, or through the CLI:

    wiregraph run examples/arithmetic.py -b foo/a=15 -b foo/b=3
    wiregraph tree foo/e examples/arithmetic.py
"""

import operator

import wiregraph as wg


def increment(x: float) -> float:
    return x + 1


def total(*xs: float) -> float:
    return sum(xs)


# foo/a and foo/b are free variables; foo/c, foo/d and foo/e are computed
TABLE = {
    "foo/c": (["foo/a", "foo/b"], operator.mul),
    "foo/d": (["foo/c"], increment),
    "foo/e": (["foo/a", "foo/c", "foo/d"], total),
}

if __name__ == "__main__":
    graph = wg.compile_graph(TABLE)
    print("Free variables:", sorted(str(n) for n in wg.free_variables(graph)))

    results = wg.execute_graph(graph, {"foo/a": 15, "foo/b": 3})
    for name, value in results.items():
        print(f"{name} = {value}")

    # Bind foo/c directly to skip its function
    overridden = wg.execute_graph(graph, {"foo/a": 15, "foo/b": 3, "foo/c": 20})
    print("foo/e with foo/c = 20:", overridden[wg.Name("foo", "e")])
