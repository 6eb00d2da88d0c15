from setuptools import setup, find_packages

setup(
    name="issue_index",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
)
