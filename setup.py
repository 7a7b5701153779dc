# setup.py
from setuptools import setup, find_packages

setup(
    name="lispcore",
    version="0.1.0",
    description="Session-scoped S-expression interpreter for arithmetic, define and if",
    packages=find_packages(include=["lispcore", "lispcore.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lispcore=lispcore.__main__:main"],
    },
    zip_safe=False,
)
