from setuptools import setup, find_packages

setup(
    name="chaffgrader",
    version="1.0.0",
    description="Autograder report generation from wheat, chaff, and functionality test results",
    license="MIT",
    packages=find_packages(include=["chaffgrader", "chaffgrader.*"]),
    install_requires=[
        "jsonschema>=4.20.0",
        "click>=8.1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "chaffgrader=chaffgrader.cli:main",
        ],
    },
    python_requires=">=3.8",
)
