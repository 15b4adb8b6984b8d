# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="gitsense-scaffold",
    version="1.2.0",
    description="Convert text folder structures into downloadable project scaffolds",
    author="GitSense",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["gitsense", "gitsense.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",  # GitHub contents API client
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'gitsense=gitsense.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
