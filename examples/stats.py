"""Statistics Example for lazyeager.

Mean and variance of a small sample, each statistic declared as a vertex
that depends on the others by name.

Run it with:
    lazyeager solve examples/stats.py
    lazyeager solve examples/stats.py --node m
"""

import lazyeager as le

graph = le.Graph()

# Input sample
graph.add_vertex("xs", le.Node(lambda: [1, 2, 3, 6]))

# Sample size
graph.add_vertex("n", le.Node(len, "xs"))


# Mean
@graph.vertex(depends=["xs", "n"])
def m(xs: list[int], n: int) -> float:
    return sum(xs) / n


# Mean of squares
@graph.vertex(depends=["xs", "n"])
def m2(xs: list[int], n: int) -> float:
    return sum(x * x for x in xs) / n


# Variance
@graph.vertex(depends=["m", "m2"])
def v(m: float, m2: float) -> float:
    return m2 - m * m
