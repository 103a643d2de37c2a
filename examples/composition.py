"""Combine two independently written tables without name collisions."""

import wiregraph as wg

# Both tables use the same local names
pricing = {
    "subtotal": (["unit_price", "quantity"], lambda price, qty: price * qty),
    "total": (["subtotal", "tax_rate"], lambda subtotal, rate: subtotal * (1 + rate)),
}

shipping = {
    "total": (["weight", "rate"], lambda weight, rate: weight * rate),
}

TABLE = wg.merge_tables(
    wg.with_namespace(pricing, "pricing"),
    wg.with_namespace(shipping, "shipping"),
    {
        "order/total": (["pricing/total", "shipping/total"], lambda a, b: a + b),
    },
)

if __name__ == "__main__":
    graph = wg.compile_graph(TABLE)
    print("Namespaces:", sorted(ns for ns in wg.list_namespaces(TABLE) if ns))

    results = wg.execute_graph(
        graph,
        {
            "pricing/unit_price": 12.5,
            "pricing/quantity": 4,
            "pricing/tax_rate": 0.2,
            "shipping/weight": 3.0,
            "shipping/rate": 1.5,
        },
    )
    print("order/total =", results[wg.Name("order", "total")])

    # Keep the pricing part only, in a versioned namespace
    v2 = wg.append_namespace(wg.filter_namespace(TABLE, "pricing"), "v2")
    print("Versioned keys:", sorted(str(k) for k in v2))
