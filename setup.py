# setup.py
from setuptools import setup, find_packages

setup(
    name="aegis-ls",
    version="0.1.0",
    description="Language server for Aegis: compiler diagnostics and symbol completion",
    packages=find_packages(include=["aegis", "aegis.*", "aegis_lsp", "aegis_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=2.0",
        "lsprotocol>=2025.0.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "aegis-ls = aegis_lsp.server:main",
        ],
    },
    zip_safe=False,
)
