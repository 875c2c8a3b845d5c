"""Progress bars for batch capture analysis."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from tqdm import tqdm


def progress(it: Iterable,
             desc: str = "",
             unit: str = "file",
             total: Optional[int] = None,
             disable: bool = False):
    """Wrap ``it`` in a transient tqdm bar on stderr, keeping stdout for results."""

    return tqdm(
        it, desc=desc, unit=unit, total=total, leave=False, disable=disable,
        file=sys.stderr, dynamic_ncols=True, miniters=1,
        bar_format="{l_bar}{bar} | {n_fmt}/{total_fmt} captures • {elapsed}"
    )
