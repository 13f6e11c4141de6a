from setuptools import setup, find_namespace_packages


setup(
    name='bonding_core',
    version='0.1',
    packages=find_namespace_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        'pydantic>=2',
        'flask',
        'flask-openapi3',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'bonding_core = bonding_core.webapi.webapi:main',
        ],
    },
)
