# This file is Copyright 2019 Volatility Foundation and licensed under the Volatility Software License 1.0
# which is available at https://www.volatilityfoundation.org/license/vsl-v1.0
#

import os

import setuptools


def get_requires(filename):
    requirements = []
    with open(filename, "r", encoding="utf-8") as fh:
        for line in fh.readlines():
            stripped_line = line.strip()
            if stripped_line == "" or stripped_line.startswith(("#", "-r")):
                continue
            requirements.append(stripped_line)
    return requirements


def get_version():
    version = {}
    with open(
        os.path.join("pagedump", "framework", "constants", "_version.py"),
        "r",
        encoding="utf-8",
    ) as fh:
        exec(fh.read(), version)
    return version["PACKAGE_VERSION"]


setuptools.setup(
    name="pagedump",
    version=get_version(),
    description="Physical memory layout extraction for Windows crash dumps",
    python_requires=">=3.7.0",
    packages=setuptools.find_packages(include=["pagedump", "pagedump.*"]),
    package_data={"pagedump.schemas": ["*.json"]},
    install_requires=get_requires("requirements.txt"),
    extras_require={
        "dev": get_requires("requirements-dev.txt"),
    },
    entry_points={
        "console_scripts": [
            "pagedump=pagedump.cli:main",
        ],
    },
)
