# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="randcp",
    version="0.9.0",
    description="Copy a random sample of files from one directory to another",
    author="Santosh Sivaraj",
    author_email="santosh@fossix.org",
    license="GPL-2.0-or-later",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["randcp", "randcp.*"]),
    package_data={"randcp.interface.locales": ["*.json"]},
    include_package_data=True,
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'randcp=randcp.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Topic :: System :: Filesystems",
    ],
)
