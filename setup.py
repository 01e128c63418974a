from setuptools import setup, find_packages
import os

install_requires = ["lark>=1.1", "pydantic>=2.0"]

# Define optional dependencies for development and specific features
extras_require = {"dev": ["pytest"], "lsp": ["pygls>=1.1.0,<2", "lsprotocol"]}  # Language Server Protocol support

setup(
    name="ascript-compiler",
    version="1.0.0",
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "asc = asc.cli:main",
        ],
    },
    include_package_data=True,
    package_data={"asc.parser": ["*.lark"]},
    description="An interpreter and JavaScript transpiler for the AScript language.",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
)
