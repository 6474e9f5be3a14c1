# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="locsync",
    version="1.0.0",
    description="Synchronize locale JSON trees against a reference locale",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["locsync", "locsync.*"]),
    package_data={"locsync.interface": ["locales/*.json"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'locsync=locsync.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
