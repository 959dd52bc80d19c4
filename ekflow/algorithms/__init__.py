"""Max-flow algorithms over `FlowNetwork`.

Modules: `bfs` (residual breadth-first search), `edmonds_karp` (the
augmentation engine), `min_cut` (residual reachability and s-t cuts) and
`types` (result records).
"""
