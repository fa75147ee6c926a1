"""
Graph utilities
Printing and statistics for the computation graph held by an Arena
"""

import numpy as np
from typing import Dict, List, Optional
from collections import Counter

from .arena import Arena
from .node import Handle
from .engine import topological_order


def _select(arena: Arena, root: Optional[Handle]) -> List[Handle]:
    if root is None:
        return list(arena.handles())
    return topological_order(arena, root)


def get_graph_stats(arena: Arena, root: Optional[Handle] = None) -> Dict:
    """
    Graph statistics (no printing).

    Args:
        arena: arena to inspect
        root:  restrict the statistics to nodes reachable from this handle;
               None means every node in the arena

    Returns:
        statistics dictionary
    """
    handles = _select(arena, root)
    if not handles:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(handles)
    fan_ins = [len(arena.children(h)) for h in handles]

    # fan-out counts edges coming from the selected nodes only
    fan_outs = Counter()
    for h in handles:
        for child in arena.children(h):
            fan_outs[child] += 1
    fan_out_list = [fan_outs[h] for h in handles]

    op_counter = Counter(arena.read(h).op_tag for h in handles)

    return {
        'nodes': n_nodes,
        'edges': sum(fan_ins),
        'leaves': op_counter.get('leaf', 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_out_list),
        'avg_fan_out': float(np.mean(fan_out_list)),
        'operations': dict(op_counter)
    }


def print_graph_summary(arena: Arena, root: Optional[Handle] = None) -> Dict:
    """
    Print a summary of the graph and return the statistics dictionary.
    """
    stats = get_graph_stats(arena, root)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")
    print("="*70 + "\n")
    return stats


def print_computation_graph(arena: Arena, root: Optional[Handle] = None,
                            max_nodes: int = 20) -> None:
    """
    Print one line per node: index, tag, data, grad and child indices.
    """
    handles = _select(arena, root)
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if not handles:
        print("Empty graph")
        return

    for h in handles[:max_nodes]:
        node = arena.read(h)
        if node.children:
            child_info = ", ".join(f"Node{c.index}" for c in node.children)
            print(f"Node {h.index:4d}: {node.op_tag:12s} ({node.data:10.6f}, grad {node.grad:10.6f}) <- [{child_info}]")
        else:
            print(f"Node {h.index:4d}: {node.op_tag:12s} ({node.data:10.6f}, grad {node.grad:10.6f}) [leaf/input]")

    if len(handles) > max_nodes:
        print(f"... ({len(handles) - max_nodes} more nodes)")

    print("="*70 + "\n")
