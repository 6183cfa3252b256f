from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "PyYAML>=6.0.3",
    "python-dotenv>=1.0.0",
    "rich>=13.0.0",
]

setup(
    name="printer-reset",
    version="0.1.0",
    description="Reset printer preferences, spool queue, drivers and ports on Windows",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["printreset", "printreset.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "Topic :: Printing",
        "Topic :: System :: Systems Administration",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: Microsoft :: Windows",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "printer-reset=printreset.cli:main",
        ],
    },
    include_package_data=True,
)
