# setup.py
from setuptools import setup, find_packages

setup(
    name="santoku",
    version="0.0.1",
    description="A small Lisp with S-expressions, Q-expressions and curried lambdas",
    packages=find_packages(include=["santoku", "santoku.*"]),
    package_data={"santoku": ["prelude/*.lspy"]},
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["santoku = santoku.repl:main"],
    },
    zip_safe=False,
)
