"""``zcc`` / ``zcxx`` command-line entry points.

Arguments are split by extension: sources go to :meth:`Builder.file`,
everything else to :meth:`Builder.add_args`. The process exit status is the
executor's status.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from zcc.builder import VALUE_FLAGS, Builder
from zcc.config import BuildConfig, config_from_env
from zcc.errors import ZccError
from zcc.flags import TARGET_FLAGS, is_source_file


def split_arguments(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Return ``(sources, flags)``; option values stay with their option."""
    sources: list[str] = []
    flags: list[str] = []
    expects_value = False
    for arg in argv:
        if expects_value:
            flags.append(arg)
            expects_value = False
        elif arg in VALUE_FLAGS or arg in TARGET_FLAGS:
            flags.append(arg)
            expects_value = True
        elif is_source_file(arg):
            sources.append(arg)
        else:
            flags.append(arg)
    return sources, flags


def run(argv: Sequence[str], *, config: BuildConfig, use_cpp: bool = False) -> int:
    builder = Builder(config=config, use_cpp=use_cpp)
    sources, flags = split_arguments(argv)
    builder.files(sources).add_args(flags)
    result = builder.execute()
    if config.record_path is not None:
        builder.record(result).write(config.record_path)
    if config.log_path is not None:
        builder.logger.to_json_lines(config.log_path)
    return result.status


def main(argv: Sequence[str] | None = None, *, use_cpp: bool = False) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = config_from_env(os.environ)
    except ZccError as exc:
        print(f"Error: Compilation failed - {exc}", file=sys.stderr)
        return 1
    return run(args, config=config, use_cpp=use_cpp)


def main_cpp(argv: Sequence[str] | None = None) -> int:
    return main(argv, use_cpp=True)


if __name__ == "__main__":
    raise SystemExit(main())
