"""
manifold-planning - sampling and traversal on implicit constraint manifolds

Setup script for pip installation.
"""

from setuptools import setup, find_packages

setup(
    name="manifold-planning",
    version="0.1.0",
    description="Projection-based constrained sampling and manifold traversal for motion planning",
    author="Manifold Planning Team",
    python_requires=">=3.8",
    packages=find_packages(include=["manifold_planning", "manifold_planning.*"]),
    package_data={"manifold_planning": ["configs/*.yaml"]},
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
        "hydra-core>=1.3",
        "omegaconf>=2.3",
        "matplotlib>=3.5",
        "tqdm>=4.60",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "isort>=5.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "manifold-demo=manifold_planning.demo:main",
        ],
    },
)
