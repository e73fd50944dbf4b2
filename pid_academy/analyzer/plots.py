"""
Plotting utilities for simulation runs and the live history window.
"""

from typing import Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from pid_academy.logging.history import HistoryBuffer


class SimulationPlotter:
    """
    Matplotlib figures for reviewing a run.

    ``plot_result`` takes anything shaped like a SimulationResult;
    ``plot_history`` draws the loop's bounded chart window.
    """

    def __init__(self, style: str = 'seaborn-v0_8-whitegrid'):
        """
        Initialize plotter.

        Args:
            style: Matplotlib style to use
        """
        self._style = style if style in plt.style.available else 'default'

        self._colors = {
            'setpoint': '#2ecc71',
            'value': '#3498db',
            'error': '#e74c3c',
            'output': '#9b59b6',
            'manual': '#7f8c8d',
            'p_term': '#f39c12',
            'i_term': '#1abc9c',
            'd_term': '#e67e22',
            'stability': '#1abc9c',
            'speed': '#f39c12',
            'accuracy': '#3498db',
        }

    def plot_result(
        self,
        result,
        title: Optional[str] = None,
        figsize: Tuple[int, int] = (14, 10)
    ) -> Figure:
        """
        Three-panel plot: response, PID terms, scores.

        Args:
            result: SimulationResult from a headless run
            title: Overall title (defaults to plant and difficulty)
            figsize: Figure size

        Returns:
            Matplotlib Figure
        """
        t = result.timestamps
        with plt.style.context(self._style):
            fig, (ax_resp, ax_terms, ax_score) = plt.subplots(3, 1, figsize=figsize, sharex=True)

            ax_resp.plot(t, result.setpoints, '--', color=self._colors['setpoint'],
                         linewidth=2, label='Setpoint')
            ax_resp.plot(t, result.values, '-', color=self._colors['value'],
                         linewidth=1.5, label='Value')
            ax_resp.set_ylabel('Value')
            ax_resp.legend(loc='upper right')
            ax_resp.grid(True, alpha=0.3)

            ax_terms.plot(t, result.outputs, color=self._colors['output'], label='Output')
            ax_terms.plot(t, result.p_terms, color=self._colors['p_term'], alpha=0.7, label='P')
            ax_terms.plot(t, result.i_terms, color=self._colors['i_term'], alpha=0.7, label='I')
            ax_terms.plot(t, result.d_terms, color=self._colors['d_term'], alpha=0.7, label='D')
            if np.any(result.manual_inputs):
                ax_terms.plot(t, result.manual_inputs, ':', color=self._colors['manual'],
                              label='Manual')
            ax_terms.axhline(y=0, color='gray', linestyle=':', alpha=0.5)
            ax_terms.set_ylabel('Control')
            ax_terms.legend(loc='upper right')
            ax_terms.grid(True, alpha=0.3)

            ax_score.plot(t, result.stability_scores, color=self._colors['stability'], label='Stability')
            ax_score.plot(t, result.speed_scores, color=self._colors['speed'], label='Speed')
            ax_score.plot(t, result.accuracy_scores, color=self._colors['accuracy'], label='Accuracy')
            ax_score.set_ylim(0, 100)
            ax_score.set_xlabel('Time (s)')
            ax_score.set_ylabel('Score')
            ax_score.legend(loc='lower right')
            ax_score.grid(True, alpha=0.3)

            if title is None:
                title = f"{result.plant} ({result.difficulty}) - grade {result.final_grade}"
            fig.suptitle(title, fontsize=14, fontweight='bold')
            fig.tight_layout()
        return fig

    def plot_history(
        self,
        history: HistoryBuffer,
        title: str = "Recent History",
        figsize: Tuple[int, int] = (12, 5)
    ) -> Figure:
        """
        Plot the chart window: setpoint, value, output and manual input.

        Args:
            history: The loop's history buffer
            title: Plot title
            figsize: Figure size

        Returns:
            Matplotlib Figure
        """
        t = history.column('time')
        with plt.style.context(self._style):
            fig, ax = plt.subplots(figsize=figsize)
            ax.plot(t, history.column('setpoint'), '--', color=self._colors['setpoint'],
                    linewidth=2, label='Setpoint')
            ax.plot(t, history.column('value'), '-', color=self._colors['value'], label='Value')
            ax.plot(t, history.column('output'), '-', color=self._colors['output'],
                    alpha=0.6, label='PID output')
            ax.plot(t, history.column('manual_input'), ':', color=self._colors['manual'],
                    label='Manual input')
            ax.set_xlabel('Time (s)')
            ax.set_title(title, fontsize=14, fontweight='bold')
            ax.legend(loc='upper left')
            ax.grid(True, alpha=0.3)
            fig.tight_layout()
        return fig

    @staticmethod
    def show():
        """Display all plots."""
        plt.show()

    @staticmethod
    def save(fig: Figure, path: str, dpi: int = 150):
        """Save figure to file."""
        fig.savefig(path, dpi=dpi, bbox_inches='tight')
