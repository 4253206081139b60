from setuptools import setup, find_packages

setup(
    name="clusterenv",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "Jinja2>=3",
        "typer",
        "rich",
        "cli-core-yo>=1.3,<2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "clusterenv=clusterenv.cli:main",
        ],
    },
)
