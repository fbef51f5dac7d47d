# setup.py
from setuptools import setup, find_packages

setup(
    name="choccy",
    version="0.0.0.0.4",
    description="A small Lisp-like expression evaluator",
    packages=find_packages(include=["choccy", "choccy.*"]),
    python_requires=">=3.9",
    install_requires=[
        "prompt_toolkit>=3.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["choccy=choccy.repl:main"],
    },
    zip_safe=False,
)
