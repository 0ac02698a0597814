from setuptools import setup, find_packages

setup(
    name="flagtree",
    version="0.1.0",
    description="Declarative flag parsing and subcommand dispatch for Python CLIs.",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(include=["flagtree", "flagtree.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "pydantic>=2.0",
        "python-json-logger>=3.1",
        "PyYAML>=6.0",
        "toml>=0.10",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
