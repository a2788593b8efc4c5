"""Dinic's maximum-flow algorithm and the bipartite-graph benchmark built on it."""

from typing import Optional

from ambench.microbench.common import BenchRandom, Setting

INF = 0x3F3F3F


class Dinic:
    """Flow network on ``n`` vertices with adjacency kept as linked edge lists."""

    def __init__(self, n: int) -> None:
        self.n = n
        self._head = [-1] * n
        self._next: list[int] = []
        self._to: list[int] = []
        self._cap: list[int] = []
        self._flow: list[int] = []
        self._dist = [0] * n

    def add_edge(self, u: int, v: int, c: int) -> None:
        """Add an edge ``u -> v`` of capacity ``c`` with its residual twin; zero capacity is ignored."""
        if c == 0:
            return
        for a, b, cap in ((u, v, c), (v, u, 0)):
            self._to.append(b)
            self._cap.append(cap)
            self._flow.append(0)
            self._next.append(self._head[a])
            self._head[a] = len(self._to) - 1

    def _edges(self, x: int):
        i = self._head[x]
        while i != -1:
            yield i
            i = self._next[i]

    def _bfs(self, s: int, t: int) -> bool:
        visited = [False] * self.n
        visited[s] = True
        self._dist[s] = 0
        queue = [s]
        for x in queue:
            for i in self._edges(x):
                y = self._to[i]
                if not visited[y] and self._cap[i] > self._flow[i]:
                    visited[y] = True
                    self._dist[y] = self._dist[x] + 1
                    queue.append(y)
        return visited[t]

    def _dfs(self, x: int, t: int, limit: int) -> int:
        if x == t or limit == 0:
            return limit
        total = 0
        for i in self._edges(x):
            y = self._to[i]
            if self._dist[x] + 1 != self._dist[y]:
                continue
            pushed = self._dfs(y, t, min(limit, self._cap[i] - self._flow[i]))
            if pushed > 0:
                self._flow[i] += pushed
                self._flow[i ^ 1] -= pushed
                total += pushed
                limit -= pushed
                if limit == 0:
                    break
        return total

    def max_flow(self, s: int, t: int) -> int:
        """Push as much additional flow from ``s`` to ``t`` as the residual network allows."""
        flow = 0
        while self._bfs(s, t):
            flow += self._dfs(s, t, INF)
        return flow


class DinicBench:
    """Maximum flow through a random bipartite network."""

    name = "dinic"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.graph: Optional[Dinic] = None
        self.answer: Optional[int] = None

    def prepare(self) -> None:
        n = self.setting.size
        rng = BenchRandom()
        rng.srand(1)
        source, sink = 2 * n, 2 * n + 1
        graph = Dinic(2 * n + 2)
        for i in range(n):
            for j in range(n):
                graph.add_edge(i, n + j, rng.rand() % 10)
        for i in range(n):
            graph.add_edge(source, i, rng.rand() % 1000)
            graph.add_edge(n + i, sink, rng.rand() % 1000)
        self.graph = graph
        self.answer = None

    def run(self) -> None:
        if self.graph is None:
            raise RuntimeError("prepare() must be called before run()")
        n = self.setting.size
        self.answer = self.graph.max_flow(2 * n, 2 * n + 1)

    def validate(self) -> bool:
        return self.answer == self.setting.checksum