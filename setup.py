from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="stagestat",
    version="0.1.0",
    description="Per-path staged/unstaged line statistics for git repositories",
    author="Sir Wabbit",
    python_requires=">=3.11",
    packages=find_namespace_packages(include=["stagestat", "stagestat.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "stagestat = stagestat.__main__:main",
        ],
    },
)
