"""
Common plotting style configuration for black and white printing.
"""

import matplotlib

matplotlib.use("Agg")  # Figures are only ever written to disk
import matplotlib.pyplot as plt
import numpy as np


# Extended grayscale palette for multiple series
GRAYSCALE_PALETTE = ['0.0', '0.3', '0.5', '0.65', '0.2', '0.4', '0.6', '0.75']

# Marker styles for line plots
MARKERS = ['o', 's', '^', 'D', 'v', '<', '>', 'p']

# Line styles for distinction
LINESTYLES = ['-', '--', '-.', ':', '-', '--', '-.', ':']


def setup_plot_style():
    """Set up matplotlib for academic paper styling."""
    plt.style.use('default')
    plt.rcParams.update({
        # Font settings
        'font.size': 11,
        'axes.titlesize': 12,
        'axes.labelsize': 11,
        'xtick.labelsize': 10,
        'ytick.labelsize': 10,
        'legend.fontsize': 9,
        'figure.titlesize': 14,

        # Color settings for B&W compatibility
        'text.color': 'black',
        'axes.labelcolor': 'black',
        'xtick.color': 'black',
        'ytick.color': 'black',
        'axes.edgecolor': 'black',

        # Line and marker settings
        'lines.linewidth': 1.5,
        'lines.markersize': 5,

        # Grid settings
        'grid.alpha': 0.3,
        'grid.linestyle': ':',
        'grid.color': '0.5',

        # Figure settings
        'figure.facecolor': 'white',
        'axes.facecolor': 'white',
        'savefig.facecolor': 'white',
        'savefig.edgecolor': 'none',

        # Legend settings
        'legend.frameon': True,
        'legend.fancybox': False,
        'legend.framealpha': 1.0,
        'legend.edgecolor': 'black',
    })


def get_color_scheme(n_series):
    """
    Get a color scheme for n series that works in grayscale.

    Parameters
    ----------
    n_series : int
        Number of data series to plot

    Returns
    -------
    list
        List of grayscale color values
    """
    if n_series <= len(GRAYSCALE_PALETTE):
        return GRAYSCALE_PALETTE[:n_series]
    else:
        return [f"{v:.2f}" for v in np.linspace(0.0, 0.75, n_series)]


def _cycle(values, n):
    return [values[i % len(values)] for i in range(n)]


def get_line_styles(n_series):
    """
    Get line styles including colors, markers, and line styles.

    Parameters
    ----------
    n_series : int
        Number of data series

    Returns
    -------
    tuple
        (colors, markers, linestyles) where each is a list of length n_series
    """
    colors = get_color_scheme(n_series)
    return colors, _cycle(MARKERS, n_series), _cycle(LINESTYLES, n_series)


def save_figure(fig, base_path, formats=('png', 'pdf'), dpi=300):
    """
    Save figure in multiple formats.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to save
    base_path : str or Path
        Base path without extension
    formats : sequence
        File formats to save
    dpi : int
        Resolution for raster formats
    """
    for fmt in formats:
        fig.savefig(f"{base_path}.{fmt}", dpi=dpi, bbox_inches='tight',
                    facecolor='white', edgecolor='none')
