"""
Balanced Tree Demo -- Rotation cases, deletion, height growth, churn and timing.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from balanced_tree import BalancedTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)
REPORT_PATH = Path(__file__).parent / "report.pdf"

COLORS = {
    "node": "#3498db",
    "removed": "#e74c3c",
    "edge": "#7f8c8d",
    "sorted": "#e67e22",
    "random": "#27ae60",
    "bound": "#9b59b6",
    "add": "#3498db",
    "exists": "#27ae60",
    "remove": "#e74c3c",
}


def build_tree(values):
    tree = BalancedTree()
    for v in values:
        tree.add(v)
    return tree


def tree_layout(tree):
    """
    Recover node positions from the pre-order sequence.

    A binary search tree is fully determined by its pre-order, so the shape
    can be rebuilt without touching the tree's internals. Returns
    ({value: (x, depth)}, [(parent, child), ...]) with x the in-order rank.
    """
    order = list(tree.pre_order())
    if not order:
        return {}, []

    children = {order[0]: [None, None]}
    depth = {order[0]: 0}
    edges = []
    for value in order[1:]:
        parent = order[0]
        level = 1
        while True:
            side = 0 if value < parent else 1
            nxt = children[parent][side]
            if nxt is None:
                children[parent][side] = value
                children[value] = [None, None]
                depth[value] = level
                edges.append((parent, value))
                break
            parent = nxt
            level += 1

    rank = {v: i for i, v in enumerate(sorted(order))}
    return {v: (rank[v], depth[v]) for v in order}, edges


def draw_tree(ax, tree, title, highlight=None):
    positions, edges = tree_layout(tree)
    for parent, child in edges:
        x0, y0 = positions[parent]
        x1, y1 = positions[child]
        ax.plot([x0, x1], [-y0, -y1], color=COLORS["edge"], linewidth=1.5, zorder=1)
    for value, (x, y) in positions.items():
        color = COLORS["removed"] if value == highlight else COLORS["node"]
        ax.scatter([x], [-y], s=900, color=color, zorder=2, edgecolors="white", linewidths=2)
        ax.text(x, -y, str(value), ha="center", va="center", fontsize=11,
                fontweight="bold", color="white", zorder=3)
    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_xlim(-1, max(len(positions), 3))
    ax.set_ylim(-max(tree.height(), 2) - 0.2, 0.6)
    ax.axis("off")


def example_1_rotation_cases():
    """Draw the four single/double rotation cases side by side."""
    print("=" * 60)
    print("Example 1: Rotation Cases")
    print("=" * 60)

    cases = [
        ("Right-right -> left rotation", [10, 20, 30]),
        ("Left-left -> right rotation", [30, 20, 10]),
        ("Left-right -> double rotation", [30, 10, 20]),
        ("Right-left -> double rotation", [10, 30, 20]),
    ]

    fig, axes = plt.subplots(1, 4, figsize=(16, 4))
    for ax, (name, values) in zip(axes, cases):
        tree = build_tree(values)
        draw_tree(ax, tree, f"{name}\ninsert {values}")
        print(f"  insert {values}: pre-order={list(tree.pre_order())}, "
              f"height={tree.height()}, balanced={tree.is_balanced()}")

    fig.suptitle("Every Imbalanced Three-Node Insert Settles at Root 20",
                 fontsize=15, fontweight="bold", y=0.99)
    fig.tight_layout(rect=[0, 0, 1, 0.93])
    path = VIZ_DIR / "01_rotation_cases.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)

    print()
    return [path]


def example_2_two_child_deletion():
    """Remove a node with two children and show the successor taking its place."""
    print("=" * 60)
    print("Example 2: Two-Child Deletion")
    print("=" * 60)

    values = [5, 3, 8, 1, 4, 7, 9]
    tree = build_tree(values)

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    draw_tree(axes[0], tree, "Before remove(3)", highlight=3)
    print(f"  before: in-order={list(tree)}")
    tree.remove(3)
    draw_tree(axes[1], tree, "After remove(3): successor 4 moves up", highlight=None)
    print(f"  after:  in-order={list(tree)}, pre-order={list(tree.pre_order())}")
    print(f"  balanced={tree.is_balanced()}, height={tree.height()}")

    fig.suptitle("Deletion via In-Order Successor", fontsize=15, fontweight="bold", y=0.99)
    fig.tight_layout(rect=[0, 0, 1, 0.93])
    path = VIZ_DIR / "02_two_child_deletion.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)

    print()
    return [path]


def example_3_height_growth():
    """Height against n for sorted and random insertion, with AVL bounds."""
    print("=" * 60)
    print("Example 3: Height Growth vs Theoretical Bounds")
    print("=" * 60)

    n_max = 5000
    checkpoints = np.unique(np.logspace(0, np.log10(n_max), 60).astype(int))

    heights = {}
    for name, values in [
        ("sorted", np.arange(n_max)),
        ("random", np.random.permutation(n_max)),
    ]:
        tree = BalancedTree()
        recorded = []
        wanted = set(checkpoints.tolist())
        for n, v in enumerate(values.tolist(), start=1):
            tree.add(v)
            if n in wanted:
                recorded.append(tree.height())
        heights[name] = np.array(recorded)
        print(f"  {name:>6}: height at n={n_max} is {tree.height()}")

    lower = np.log2(checkpoints + 1)
    upper = 1.44 * np.log2(checkpoints + 2)
    print(f"  bounds at n={n_max}: log2(n+1)={lower[-1]:.2f}, 1.44*log2(n+2)={upper[-1]:.2f}")

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.step(checkpoints, heights["sorted"], where="post", color=COLORS["sorted"],
            linewidth=2, label="Sorted insertion")
    ax.step(checkpoints, heights["random"], where="post", color=COLORS["random"],
            linewidth=2, label="Random insertion")
    ax.plot(checkpoints, lower, "--", color="gray", linewidth=1.5, label="log2(n+1) (perfect tree)")
    ax.plot(checkpoints, upper, "--", color=COLORS["bound"], linewidth=1.5,
            label="1.44 log2(n+2) (AVL worst case)")
    ax.set_xscale("log")
    ax.set_xlabel("Number of values n", fontsize=12)
    ax.set_ylabel("Tree height", fontsize=12)
    ax.set_title("Height Stays Logarithmic Regardless of Insertion Order",
                 fontsize=14, fontweight="bold")
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    path = VIZ_DIR / "03_height_growth.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)

    print()
    return [path]


def example_4_churn():
    """Track height and size through a long mixed add/remove workload."""
    print("=" * 60)
    print("Example 4: Add/Remove Churn")
    print("=" * 60)

    steps = 20000
    universe = 3000
    ops = np.random.random(steps) < 0.55
    keys = np.random.randint(0, universe, size=steps)

    tree = BalancedTree()
    sizes = np.zeros(steps, dtype=int)
    heights = np.zeros(steps, dtype=int)
    violations = 0
    for i, (is_add, key) in enumerate(zip(ops.tolist(), keys.tolist())):
        if is_add:
            tree.add(key)
        else:
            tree.remove(key)
        sizes[i] = len(tree)
        heights[i] = tree.height()
        if i % 1000 == 0 and not tree.is_balanced():
            violations += 1

    bound = 1.44 * np.log2(sizes + 2)
    print(f"  final size={sizes[-1]}, final height={heights[-1]}")
    print(f"  max height/bound ratio: {np.max(heights / bound):.3f}")
    print(f"  balance violations observed: {violations}")

    fig, ax1 = plt.subplots(figsize=(11, 6))
    ax1.plot(sizes, color=COLORS["random"], linewidth=1.2, label="Size")
    ax1.set_xlabel("Operation index", fontsize=12)
    ax1.set_ylabel("Size", fontsize=12, color=COLORS["random"])
    ax2 = ax1.twinx()
    ax2.plot(heights, color=COLORS["sorted"], linewidth=1.2, label="Height")
    ax2.plot(bound, "--", color=COLORS["bound"], linewidth=1.2, label="1.44 log2(size+2)")
    ax2.set_ylabel("Height", fontsize=12, color=COLORS["sorted"])
    lines = ax1.get_lines() + ax2.get_lines()
    ax1.legend(lines, [line.get_label() for line in lines], fontsize=10, loc="lower right")
    ax1.grid(True, alpha=0.3)
    ax1.set_title("Height Tracks Size Under Mixed Workload", fontsize=14, fontweight="bold")
    fig.tight_layout()
    path = VIZ_DIR / "04_churn.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)

    print()
    return [path]


def _mean_seconds(fn, values):
    start = time.perf_counter()
    for v in values:
        fn(v)
    return (time.perf_counter() - start) / len(values)


def example_5_operation_timing():
    """Mean per-operation time for add, exists and remove as n grows."""
    print("=" * 60)
    print("Example 5: Operation Timing")
    print("=" * 60)

    sizes = [2 ** k for k in range(8, 16)]
    probes = 500
    timings = {"add": [], "exists": [], "remove": []}

    for n in sizes:
        values = np.random.permutation(n * 4)
        base, extra = values[:n].tolist(), values[n:n + probes].tolist()
        tree = build_tree(base)
        timings["add"].append(_mean_seconds(tree.add, extra))
        timings["exists"].append(_mean_seconds(tree.exists, extra))
        timings["remove"].append(_mean_seconds(tree.remove, extra))
        print(f"  n={n:>6}: add={timings['add'][-1] * 1e6:6.2f}us  "
              f"exists={timings['exists'][-1] * 1e6:6.2f}us  "
              f"remove={timings['remove'][-1] * 1e6:6.2f}us")

    sizes_arr = np.array(sizes)
    reference = np.log2(sizes_arr)
    reference = reference * (np.array(timings["add"]) * 1e6)[0] / reference[0]

    fig, ax = plt.subplots(figsize=(10, 6))
    for name, values in timings.items():
        ax.plot(sizes_arr, np.array(values) * 1e6, "o-", color=COLORS[name], linewidth=2, label=name)
    ax.plot(sizes_arr, reference, "--", color="gray", linewidth=1.5, label="scaled log2(n)")
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Tree size n", fontsize=12)
    ax.set_ylabel("Mean time per operation (us)", fontsize=12)
    ax.set_title("Operation Cost Grows Logarithmically", fontsize=14, fontweight="bold")
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    path = VIZ_DIR / "05_operation_timing.png"
    fig.savefig(path, dpi=150)
    plt.close(fig)

    print()
    return [path]


def generate_pdf_report(all_figures):
    """Generate comprehensive PDF report with all visualizations."""
    print("=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    with PdfPages(REPORT_PATH) as pdf:
        fig, ax = plt.subplots(figsize=(10, 7))
        ax.axis("off")
        ax.text(0.5, 0.7, "Balanced Tree", fontsize=28, fontweight="bold",
                ha="center", va="center", transform=ax.transAxes)
        ax.text(0.5, 0.55, "AVL Rotations, Deletion and Growth Report",
                fontsize=16, ha="center", va="center", transform=ax.transAxes,
                color="gray")
        ax.text(0.5, 0.40, "add | remove | exists | in/pre/post-order traversal",
                fontsize=13, ha="center", va="center", transform=ax.transAxes,
                color="#555555")
        ax.text(0.5, 0.25, f"Seed: {SEED}",
                fontsize=11, ha="center", va="center", transform=ax.transAxes,
                color="#888888")
        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        fig, ax = plt.subplots(figsize=(10, 7))
        ax.axis("off")
        summary_text = (
            "Summary of Key Findings\n"
            "========================\n\n"
            "1. Rotation Cases: all four three-node imbalances (LL, RR, LR, RL)\n"
            "   end as root 20 with children 10 and 30, height 2.\n\n"
            "2. Deletion: removing a two-child node copies the in-order\n"
            "   successor's value up and deletes the successor instead.\n\n"
            "3. Height Growth: sorted insertion builds a near-perfect tree;\n"
            "   both orders stay under the 1.44 log2(n+2) AVL bound.\n\n"
            "4. Churn: through a long mixed add/remove workload the height\n"
            "   follows the size and never breaks the balance invariant.\n\n"
            "5. Timing: add, exists and remove cost grows like log2(n)."
        )
        ax.text(0.05, 0.95, summary_text, fontsize=11, va="top", ha="left",
                transform=ax.transAxes, family="monospace")
        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        titles = [
            "Example 1: Rotation Cases",
            "Example 2: Two-Child Deletion",
            "Example 3: Height Growth vs Bounds",
            "Example 4: Add/Remove Churn",
            "Example 5: Operation Timing",
        ]

        for fig_path, title in zip(all_figures, titles):
            if fig_path.exists():
                img = plt.imread(str(fig_path))
                fig, ax = plt.subplots(figsize=(11, 8))
                ax.imshow(img)
                ax.axis("off")
                ax.set_title(title, fontsize=14, fontweight="bold", pad=10)
                fig.tight_layout()
                pdf.savefig(fig)
                plt.close(fig)

    print(f"  Report saved to: {REPORT_PATH}")
    print()


def main():
    print()
    print("*" * 60)
    print("  BALANCED TREE — COMPREHENSIVE DEMO")
    print(f"  Seed: {SEED}")
    print("*" * 60)
    print()

    all_figures = []

    all_figures.extend(example_1_rotation_cases())
    all_figures.extend(example_2_two_child_deletion())
    all_figures.extend(example_3_height_growth())
    all_figures.extend(example_4_churn())
    all_figures.extend(example_5_operation_timing())

    generate_pdf_report(all_figures)

    print("=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"  Visualizations: {VIZ_DIR}/")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"    - {f.name}")
    print(f"  PDF Report:     {REPORT_PATH}")
    print()


if __name__ == "__main__":
    main()
