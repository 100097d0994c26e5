from __future__ import annotations

from datetime import datetime, timedelta
import logging
from pathlib import Path

import numpy as np

from mailchart import render_line_chart


def _weekly_labels(days: int) -> list[datetime]:
    start = datetime(2024, 3, 1)
    return [start + timedelta(days=i) for i in range(days)]


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    labels = _weekly_labels(14)
    rng = np.random.default_rng(7)
    processed = rng.integers(20, 120, size=len(labels)).astype(np.float64)
    failed = rng.integers(0, 15, size=len(labels)).astype(np.float64)
    failed[5] = np.nan

    counts = render_line_chart(labels, {"Processed": processed, "Failed": failed})
    savings = render_line_chart(
        labels,
        {"Storage Saved": np.cumsum(rng.uniform(2e8, 9e8, size=len(labels)))},
        y_axis_formatter="filesize",
    )

    counts_path = counts.save(out_dir / "weekly_counts.png")
    savings_path = savings.save(out_dir / "weekly_savings.png")
    html_path = out_dir / "weekly_report.html"
    html_path.write_text(
        "<html><body>\n"
        f"{counts.to_img_tag(alt='Files processed')}\n"
        f"{savings.to_img_tag(alt='Storage saved')}\n"
        "</body></html>\n",
        encoding="utf-8",
    )

    print(f"wrote {counts_path}")
    print(f"wrote {savings_path}")
    print(f"wrote {html_path}")


if __name__ == "__main__":
    main()
