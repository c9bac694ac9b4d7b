# setup.py

from setuptools import setup, find_packages

setup(
    name="ChainWaveSim",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "matplotlib",
        "scipy",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "chainwavesim-run=chainwavesim.cli.run:main",
        ],
    },
)
