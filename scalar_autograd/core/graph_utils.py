"""
Computation graph utilities.
Printing and analysis of the DAG reachable from a root Value.
"""

import numpy as np
from typing import Dict, List, Tuple
from collections import Counter

from .engine import topological_order
from .var import Value


def _op_label(v: Value) -> str:
    return "leaf" if v.op is None else str(v.op)


def trace(root: Value) -> Tuple[List[Value], List[Tuple[Value, Value]]]:
    """
    Collect the nodes and edges of the graph rooted at `root`.

    Returns:
        (nodes, edges): nodes in topological order (root last) and
        (parent, child) pairs, one per operand slot.
    """
    nodes = topological_order(root)
    edges = [(p, v) for v in nodes for p in v.parents]
    return nodes, edges


def get_graph_stats(root: Value) -> Dict:
    """
    Graph statistics without printing.

    Returns:
        dict with nodes, edges, leaves, fan-in/fan-out and op counts
    """
    nodes, edges = trace(root)
    n_nodes = len(nodes)

    # Fan-in: operand slots per node
    fan_ins = [len(v.parents) for v in nodes]

    # Fan-out: uses of each node as an operand (per edge, so a*a counts twice)
    uses = Counter(id(p) for p, _ in edges)
    fan_outs = [uses[id(v)] for v in nodes]

    op_counter = Counter(_op_label(v) for v in nodes)

    return {
        'nodes': n_nodes,
        'edges': len(edges),
        'leaves': op_counter.get('leaf', 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(root: Value, detailed: bool = False) -> Dict:
    """
    Print a summary of the computation graph.

    Args:
        root: output node of the graph
        detailed: also print the node list (graphs up to 100 nodes)

    Returns:
        The statistics dict from get_graph_stats
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")

    if detailed and n_nodes <= 100:
        print_computation_graph(root, max_nodes=100)

    return stats


def print_computation_graph(root: Value, max_nodes: int = 20) -> None:
    """
    Print the graph structure, one line per node in topological order.

    Args:
        root: output node of the graph
        max_nodes: maximum number of nodes to print
    """
    nodes = topological_order(root)
    index = {id(v): i for i, v in enumerate(nodes)}

    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    for i, v in enumerate(nodes[:max_nodes]):
        data, g = float(v.data), float(v.grad)
        if v.parents:
            parent_info = ", ".join(f"Node{index[id(p)]}" for p in v.parents)
            print(f"Node {i:4d}: {_op_label(v):6s} ({data:12.6f}, grad={g:12.6f}) <- [{parent_info}]")
        else:
            label = f" {v.name}" if v.name else ""
            print(f"Node {i:4d}: {_op_label(v):6s} ({data:12.6f}, grad={g:12.6f}) [leaf{label}]")

    if len(nodes) > max_nodes:
        print(f"... ({len(nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")


def analyze_graph_complexity(root: Value) -> str:
    """
    Analyse graph size and return a text report.

    Returns:
        Multi-line report string
    """
    stats = get_graph_stats(root)

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total operations: {stats['nodes'] - stats['leaves']:,}")
    report.append(f"  Total connections: {stats['edges']:,}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    if stats['nodes'] < 1000:
        complexity = "Low"
    elif stats['nodes'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"

    report.append(f"  Complexity level: {complexity}")

    top_ops = sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True)[:3]
    report.append("  Top operations:")
    for op, count in top_ops:
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)
