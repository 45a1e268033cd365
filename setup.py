import re

import setuptools


def _get_long_description() -> str:
    """
    Returns long description from `README.md` if possible, else 'Pulseq sequence file writer'.

    Returns
    -------
    str
        Long description of pyseqwriter project.
    """
    try:
        with open("README.md", "r", encoding="utf-8") as fh:
            long_description = fh.read()
    except OSError:
        long_description = "Pulseq sequence file writer"
    return long_description


def _get_version() -> str:
    """
    Returns the version declared in `pyseqwriter/version.py` without importing the package.

    Returns
    -------
    str
        Version string `major.minor.revision`.
    """
    with open("pyseqwriter/version.py", "r", encoding="utf-8") as fh:
        text = fh.read()
    parts = [re.search(rf"^{name}: .* = (\S+)$", text, re.MULTILINE).group(1) for name in ("major", "minor", "revision")]
    return ".".join(part.strip("\"'") for part in parts)


setuptools.setup(
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Operating System :: OS Independent",
    ],
    description="Pulseq sequence file writer",
    extras_require={
        "test": [
            "coverage>=6.2",
            "pytest",
        ],
    },
    include_package_data=True,
    install_requires=[
        "numpy>=1.19.5",
    ],
    license="License :: OSI Approved :: GNU Affero General Public License v3",
    long_description=_get_long_description(),
    long_description_content_type="text/markdown",
    name="pyseqwriter",
    packages=setuptools.find_packages(include=["pyseqwriter", "pyseqwriter.*"]),
    python_requires=">=3.8",
    version=_get_version(),
)
