#!/usr/bin/env python3
"""
Setup script for the E-Sumbong Crime Map
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="sumbong-map",
    version="1.0.0",
    author="E-Sumbong Team",
    description="Interactive community crime map with category pins, heatmap view and report statistics",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where=".", include=["sumbong", "sumbong.*"]),
    py_modules=["app"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sumbong-map=app:main",
        ],
    },
    include_package_data=True,
)
