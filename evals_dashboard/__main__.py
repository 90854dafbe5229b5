"""Entry-point for ``python -m evals_dashboard``."""

from __future__ import annotations

import sys

from evals_dashboard import __version__


def main() -> None:
    """Print a short help message and exit."""
    print(
        f"evals_dashboard v{__version__}\n"
        "\n"
        "Evaluations dashboard for submitted problems and contributors\n"
        "\n"
        "Usage:\n"
        "  python -m evals_dashboard              Show this help message\n"
        "  python scripts/fetch.py                Download the submissions CSV\n"
        "  python scripts/summarize.py            Compute stats and the leaderboard\n"
        "  python scripts/watch.py [--trigger]    Poll for remote syncs in the terminal\n"
        "  streamlit run app/streamlit_app.py     Launch the dashboard\n"
    )
    sys.exit(0)


if __name__ == "__main__":
    main()
