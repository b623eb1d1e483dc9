#!/usr/bin/env python3
import os
import re
import sys
from typing import List, Optional, Pattern, Tuple

PYPROJECT = 'pyproject.toml'
PACKAGE_INIT = os.path.join('apisig', '__init__.py')

PYPROJECT_VERSION_RE = re.compile(r'^version = "([^"]+)"', re.MULTILINE)
INIT_VERSION_RE = re.compile(r'^__version__ = "([^"]+)"', re.MULTILINE)

BUMP_TYPES = ('major', 'minor', 'patch')


def bump_version(current: str, bump_type: str) -> str:
    major, minor, patch = map(int, current.split('.'))
    if bump_type == 'major':
        return f"{major + 1}.0.0"
    elif bump_type == 'minor':
        return f"{major}.{minor + 1}.0"
    elif bump_type == 'patch':
        return f"{major}.{minor}.{patch + 1}"
    else:
        raise ValueError(f"Invalid bump type: {bump_type}")


def rewrite_version(path: str, pattern: Pattern[str], new_version: str) -> str:
    """Replace the first version match in ``path`` and return the old version."""
    with open(path, 'r') as f:
        content = f.read()
    match = pattern.search(content)
    if not match:
        raise ValueError(f"Could not find version in {path}")

    start, end = match.span(1)
    with open(path, 'w') as f:
        f.write(content[:start] + new_version + content[end:])
    return match.group(1)


def bump(root: str, bump_type: str) -> Tuple[str, str]:
    """Bump pyproject.toml and the package ``__version__`` in lockstep."""
    pyproject = os.path.join(root, PYPROJECT)
    with open(pyproject, 'r') as f:
        match = PYPROJECT_VERSION_RE.search(f.read())
    if not match:
        raise ValueError(f"Could not find version in {pyproject}")

    current_version = match.group(1)
    new_version = bump_version(current_version, bump_type)
    rewrite_version(pyproject, PYPROJECT_VERSION_RE, new_version)
    rewrite_version(os.path.join(root, PACKAGE_INIT), INIT_VERSION_RE, new_version)
    return current_version, new_version


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1 or args[0] not in BUMP_TYPES:
        print("Usage: bump_version.py <major|minor|patch>", file=sys.stderr)
        return 1

    try:
        current_version, new_version = bump(os.getcwd(), args[0])
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Output for GitHub Actions
    github_output = os.environ.get('GITHUB_OUTPUT')
    if github_output:
        with open(github_output, 'a') as f:
            f.write(f"current_version={current_version}\n")
            f.write(f"new_version={new_version}\n")
    else:
        print(f"Bumped version: {current_version} -> {new_version}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
