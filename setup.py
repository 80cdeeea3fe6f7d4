from setuptools import setup, find_packages

setup(
    name="euchre_engine",
    version="0.2.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "colorama>=0.4.6",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "euchre=euchre_engine.cli:main",
        ],
    },
    author="EuchreBot Team",
    description="Euchre rules engine with bidding, trick play, scoring and AI players",
    python_requires=">=3.10",
)
