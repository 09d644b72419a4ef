from setuptools import setup, find_packages

setup(
    name="sql_splitter",
    version="0.1.0",
    description="Split large SQL files into smaller ones while preserving statement integrity",
    packages=find_packages(include=["sql_splitter", "sql_splitter.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        'click==8.1.8',
        'rich==13.9.4',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'sql-splitter=sql_splitter.main:main',
        ],
    },
)
