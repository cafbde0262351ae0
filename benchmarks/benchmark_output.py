#!/usr/bin/env python
"""
Benchmark output generation - tables, figures, and result management.
"""

import json
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import pandas as pd

from benchmarks.benchmark_utils import (
    SECTION_NAMES, SIZE_GROUP_NAMES, SectionResult,
    format_bytes, format_seconds, get_system_info, print_header
)
from benchmarks.plot_style import setup_plot_style, get_line_styles, save_figure

logger = logging.getLogger(__name__)


# ==============================================================================
# Constants
# ==============================================================================

CATEGORY_LABELS = {
    'very_small': 'Very Small',
    'small': 'Small',
    'medium': 'Medium',
    'large': 'Large',
    'very_large': 'Very Large',
    'parameters': 'Example Parameter',
}

SECTION_TITLES = {
    'arithmetic': 'Arithmetic Factoring',
    'calls': 'Function Call Overhead',
    'sequences': 'Sequence Construction',
    'polynomial': 'Polynomial Evaluation',
    'columns': 'Column Access',
    'ode': 'ODE Right-Hand Side',
}

# Sections that get a timing-versus-input-size figure
SCALING_SECTIONS = ['sequences', 'polynomial']

TIME_UNITS = [(1.0, 's'), (1e-3, 'ms'), (1e-6, r'$\mu$s'), (1e-9, 'ns')]


# ==============================================================================
# Helpers
# ==============================================================================

def _successful(results: List[SectionResult], section: Optional[str] = None) -> List[SectionResult]:
    return [r for r in results
            if not r.error and r.mark.candidates and (section is None or r.section == section)]


def group_by_case(results: List[SectionResult]) -> Dict[str, List[SectionResult]]:
    """Group results by case name, keeping first-seen order."""
    by_case = {}
    for r in results:
        by_case.setdefault(r.case, []).append(r)
    return by_case


def candidate_names(results: List[SectionResult]) -> List[str]:
    """Union of candidate names across results, in first-seen order."""
    names = []
    for r in results:
        for name in r.mark.names:
            if name not in names:
                names.append(name)
    return names


def latex_escape(text: str) -> str:
    replacements = {
        '\\': r'\textbackslash{}', '&': r'\&', '%': r'\%', '$': r'\$',
        '#': r'\#', '_': r'\_', '{': r'\{', '}': r'\}', '~': r'\textasciitilde{}',
        '^': r'\textasciicircum{}',
    }
    return ''.join(replacements.get(ch, ch) for ch in text)


def choose_time_unit(seconds: Sequence[float]) -> Tuple[float, str]:
    """Largest unit in which the smallest positive time is at least 1."""
    positive = [s for s in seconds if s > 0]
    if not positive:
        return TIME_UNITS[0]
    smallest = min(positive)
    for scale, label in TIME_UNITS:
        if smallest >= scale:
            return scale, label
    return TIME_UNITS[-1]


def _row_label(r: SectionResult) -> str:
    if r.size is not None:
        return f"$n = {r.size:,}$".replace(',', '{,}')
    return latex_escape(r.case)


# ==============================================================================
# LaTeX Table Generation
# ==============================================================================

def create_case_latex_table(section: str, case: str, results: List[SectionResult]) -> str:
    """
    Create a LaTeX table for one benchmark cell across input sizes.

    Columns are the candidates in the order they were given; the first
    candidate is the reference for the speedup columns.
    """
    names = candidate_names(results)
    reference = names[0]
    scale, unit = choose_time_unit([c.timing.median for r in results for c in r.mark])

    n_cols = 1 + 1 + 2 * (len(names) - 1)
    header_cells = [r"\multicolumn{1}{c}{\texttt{" + latex_escape(reference) + "}}"]
    header_cells += [r"\multicolumn{2}{c}{\texttt{" + latex_escape(name) + "}}" for name in names[1:]]
    rules = [r"\cmidrule(lr){2-2}"]
    rules += [rf"\cmidrule(lr){{{3 + 2 * i}-{4 + 2 * i}}}" for i in range(len(names) - 1)]
    sub_cells = ["Input", "Time"] + ["Time", "Speedup"] * (len(names) - 1)

    label = f"tab:{section}_{case}".replace(' ', '_')
    latex = [
        r"\begin{table}[htbp]",
        r"\centering",
        rf"\caption{{{SECTION_TITLES.get(section, section.title())}: \texttt{{{latex_escape(case)}}}}}",
        rf"\label{{{label}}}",
        r"\begin{tabular}{l" + "r" * (n_cols - 1) + "}",
        r"\toprule",
        " & " + " & ".join(header_cells) + r" \\",
        " ".join(rules),
        " & ".join(sub_cells) + r" \\",
        r"\midrule"
    ]

    first_category = True
    for group in SIZE_GROUP_NAMES + ['parameters']:
        group_results = [r for r in results if r.size_group == group]
        if not group_results:
            continue

        if not first_category:
            latex.append(r"\addlinespace")
        latex.append(rf"\multicolumn{{{n_cols}}}{{l}}{{\textit{{{CATEGORY_LABELS[group]} Inputs}}}} \\")
        first_category = False

        for r in sorted(group_results, key=lambda x: (x.size or 0, x.case)):
            medians = {c.name: c.timing.median for c in r.mark}
            base = medians.get(reference)
            row = [_row_label(r), f"{base / scale:,.2f}" if base else "--"]
            for name in names[1:]:
                value = medians.get(name)
                if value:
                    speedup = base / value if base else 0
                    row += [f"{value / scale:,.2f}", f"{speedup:.2f}$\\times$"]
                else:
                    row += ["--", "--"]
            latex.append(" & ".join(row) + r" \\")

    latex.extend([
        r"\bottomrule",
        r"\end{tabular}",
        r"\vspace{1ex}\newline",
        r"\footnotesize",
        rf"Median time per call in {unit}.",
        rf"Speedup is the median time of \texttt{{{latex_escape(reference)}}} divided by the candidate's ($>1$ means faster).",
        r"\end{table}"
    ])

    return "\n".join(latex)


def create_section_latex_table(results: List[SectionResult], section: str) -> str:
    """Create LaTeX tables for every cell of one benchmark family."""
    ok = _successful(results, section)
    tables = [
        create_case_latex_table(section, case, case_results)
        for case, case_results in group_by_case(ok).items()
    ]
    return "\n\n".join(tables)


# ==============================================================================
# Figure Generation Functions
# ==============================================================================

def create_scaling_figure(results: List[SectionResult], section: str, output_base,
                          formats: Sequence[str] = ('png', 'pdf')) -> bool:
    """
    Create a figure of median time versus input size, one line per candidate.

    One panel is drawn per cell of the family.  Returns False when there
    are fewer than two input sizes to plot.
    """
    ok = [r for r in _successful(results, section) if r.size is not None]
    by_case = group_by_case(ok)
    if not by_case or all(len({r.size for r in rs}) < 2 for rs in by_case.values()):
        return False

    setup_plot_style()

    n_panels = len(by_case)
    fig, axes = plt.subplots(1, n_panels, figsize=(7 * n_panels, 5), squeeze=False)

    for ax, (case, case_results) in zip(axes[0], by_case.items()):
        names = candidate_names(case_results)
        colors, markers, linestyles = get_line_styles(len(names))

        for name, color, marker, linestyle in zip(names, colors, markers, linestyles):
            points = sorted(
                (r.size, r.mark[name].timing.median)
                for r in case_results if name in r.mark.names
            )
            if not points:
                continue
            sizes, medians = zip(*points)
            ax.loglog(sizes, medians, color=color, marker=marker, linestyle=linestyle, label=name)

        ax.set_xlabel('Input Size $n$')
        ax.set_ylabel('Median Time in Seconds (Log Scale)')
        ax.set_title(f"{SECTION_TITLES.get(section, section.title())}: {case}")
        ax.grid(True, which='both', alpha=0.3, linestyle=':')
        ax.legend(loc='upper left')

    plt.tight_layout()
    save_figure(fig, output_base, formats=formats)
    plt.close(fig)
    return True


# ==============================================================================
# Result Management
# ==============================================================================

def load_results_from_json(input_dir: Path) -> Dict[str, List[SectionResult]]:
    """Load previously saved results from JSON files."""
    input_dir = Path(input_dir)
    results = {section: [] for section in SECTION_NAMES}

    for section in SECTION_NAMES:
        result_file = input_dir / f'{section}_results.json'
        if not result_file.exists():
            continue

        with open(result_file, 'r') as f:
            data = json.load(f)

        for result_dict in data['results']:
            results[section].append(SectionResult.from_dict(result_dict))

    return results


def save_all_results(
    results: Dict[str, List[SectionResult]],
    output_dir: Path,
    save_raw_data: bool = True
):
    """Save all benchmark results to files."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    # Save raw results as JSON (only if requested)
    if save_raw_data:
        system_info = get_system_info()
        for section, section_results in results.items():
            if section_results:
                data = {
                    'timestamp': time.strftime('%Y-%m-%d %H:%M:%S'),
                    'system_info': system_info,
                    'results': [r.to_dict() for r in section_results]
                }
                with open(output_dir / f'{section}_results.json', 'w') as f:
                    json.dump(data, f, indent=2)

    # Generate LaTeX tables
    for section, section_results in results.items():
        if not _successful(section_results):
            continue
        latex_table = create_section_latex_table(section_results, section)
        with open(output_dir / f'tab_{section}.tex', 'w') as f:
            f.write(latex_table)

    # Generate figures
    for section in SCALING_SECTIONS:
        if not results.get(section):
            continue
        try:
            create_scaling_figure(results[section], section, output_dir / f'{section}_scaling')
        except Exception as e:
            logger.warning("Could not generate %s scaling figure: %s", section, e)

    print(f"\nResults saved to {output_dir}/")


def summary_frame(result: SectionResult) -> pd.DataFrame:
    """Comparison table for one cell, formatted for printing."""
    frame = result.mark.to_frame()
    for column in ['min', 'median', 'max', 'total_time']:
        frame[column] = frame[column].map(format_seconds)
    frame['itr/sec'] = frame['itr/sec'].map(lambda v: f"{v:,.0f}")
    frame['mem_alloc'] = frame['mem_alloc'].map(format_bytes)
    frame['relative'] = frame['relative'].map(lambda v: f"{v:.2f}")
    return frame


def print_summary(results: Dict[str, List[SectionResult]]):
    """Print a comparison table for every benchmark cell."""
    print_header('Summary')

    for section, section_results in results.items():
        if not section_results:
            continue

        print_header(SECTION_TITLES.get(section, section.title()), '-')

        for r in section_results:
            label = f"{r.case} (n = {r.size:,})" if r.size is not None else r.case
            if r.error:
                print(f"\n{label}: ERROR: {r.error}")
                continue
            print(f"\n{label}")
            print(summary_frame(r).to_string(index=False))


def count_errors(results: Dict[str, List[SectionResult]]) -> int:
    return sum(1 for rs in results.values() for r in rs if r.error)
