from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Основные зависимости
install_requires = [
    "numpy>=1.21.0",
    "pandas>=1.5.0",
    "click>=8.0.0",
    "PyYAML>=6.0",
    "colorlog>=6.0.0",
]

# Дополнительные зависимости
extras_require = {
    "dev": [
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "scipy>=1.7.0",
        "black>=22.0.0",
        "flake8>=5.0.0",
        "mypy>=1.0.0",
    ],
}

# Все дополнительные зависимости
extras_require["all"] = list(set().union(*extras_require.values()))

setup(
    name="StatsLab",
    version="1.0.0",
    author="Dmatryus Detry",
    author_email="dmatryus.sqrt49@yandex.ru",
    description="Descriptive statistics over a continuously sorted numeric dataset",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["statslab", "statslab.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.8",
    license="Apache-2.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=[
        "statistics",
        "descriptive-statistics",
        "quartiles",
        "outliers",
        "kurtosis",
    ],
    entry_points={
        "console_scripts": [
            "statslab=statslab.cli:main",
        ],
    },
)
