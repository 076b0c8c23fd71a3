from setuptools import setup, find_packages

setup(
    name="madness-bracket-simulator",
    version="0.1.0",
    description="Weighted-metric NCAA March Madness bracket simulator",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "madness-sim=madness_sim.main:main",
        ],
    },
)
