# setup.py
"""Setup script for Pinus Hybrid."""

from setuptools import setup, find_packages
from pathlib import Path

# Read version
version = {}
with open("src/pinus_hybrid/__version__.py") as f:
    exec(f.read(), version)

# Read README
readme = Path("README.md").read_text(encoding="utf-8") if Path("README.md").exists() else ""

setup(
    name="pinus-hybrid",
    version=version["__version__"],
    description="Conifer species classification combining k-nearest neighbors with certainty-factor rules",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Pinus Hybrid Contributors",
    author_email="",
    license="MIT",

    packages=find_packages(where="src"),
    package_dir={"": "src"},

    python_requires=">=3.8",

    install_requires=[
        "numpy>=1.19.0",
    ],

    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "black>=21.0",
            "flake8>=3.9.0",
            "mypy>=0.900",
        ],
        "test": [
            "pytest>=6.0.0",
        ],
    },

    entry_points={
        "console_scripts": [
            "pinus_hybrid=pinus_hybrid.cli:main",
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],

    keywords="knn certainty-factor expert-system classification forestry conifer",
)
