"""Setup script for arithflow — ensures package discovery works with setuptools."""
from setuptools import setup, find_packages

# Explicit package discovery for reliable build (editable and wheel)
setup(
    name="arithflow",
    version="0.1.0",
    description="Flow-graph model and evaluation engine for an arithmetic block editor",
    python_requires=">=3.9",
    packages=find_packages(where=".", include=("arithflow", "arithflow.*")),
    package_dir={"": "."},
    install_requires=[
        "omegaconf>=2.3",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["arithflow=arithflow.cli:main"],
    },
)
