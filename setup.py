""" btchd build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import btchd

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=btchd.name,
    version=btchd.__version__,
    url="https://github.com/btchd/btchd",
    project_urls={
        "GitHub": "https://github.com/btchd/btchd",
        "Issues": "https://github.com/btchd/btchd/issues",
    },
    license=btchd.__license__,
    author=btchd.__author__,
    author_email=btchd.__author_email__,
    description="BIP32 hierarchical deterministic keys, BIP39 mnemonics, bech32",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"btchd": ["_data/*.json"]},
    install_requires=[
        "base58>=2.1",
        "dataclasses-json",
        "ecdsa>=0.18",
        "mnemonic>=0.20",
        "pycryptodome",
    ],
    extras_require={
        "secp256k1": ["btclib_libsecp256k1"],
        "test": ["pytest"],
    },
    keywords=(
        "bitcoin cryptography elliptic-curves hierarchical-deterministic "
        "bip32 bip39 mnemonic base58 bech32"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
