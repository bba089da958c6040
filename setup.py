from setuptools import setup, find_packages

setup(
    name="shellres",
    version="0.1.0",
    description="First-shell water residence time analysis for MD trajectories",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy",
        "matplotlib",
        "pyyaml",
        "tqdm",
    ],
    extras_require={
        'test': ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'shellres=shellres.cli:main',
        ],
    },
    python_requires=">=3.8",
)
