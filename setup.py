from setuptools import setup, find_packages

setup(
    name="creative-split",
    version="1.0.0",
    description="Creative Report Distribution Helper",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "click>=8.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "creative-split=main:main",
        ],
    },
)
