#!/usr/bin/env python3
"""
Setup script for GitLab Group Cloner.
"""

from setuptools import setup, find_packages
import pathlib

here = pathlib.Path(__file__).parent.resolve()

with open(here / "README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open(here / "requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="gitlab-group-cloner",
    version="1.0.0",
    author="GitLab Group Cloner",
    author_email="",
    description="Clone every repository of a GitLab group and its subgroups into a mirrored directory tree",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="",
    package_dir={"":"src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Version Control :: Git",
        "Topic :: System :: Archiving :: Backup",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gitlab-group-clone=gitlab_group_cloner.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
