"""Setup configuration for ssdp-search tool."""

from setuptools import setup, find_packages

setup(
    name="ssdp-search",
    version="0.1.0",
    description="Repeated SSDP M-SEARCH discovery broadcasts over UDP",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ssdp-search=ssdp_search.cli:main",
        ],
    },
)
