# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="assetcdn",
    version="1.0.0",
    description="Uploads a finished static build to a CDN and rewrites cross-file asset references",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["assetcdn", "assetcdn.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'assetcdn=assetcdn.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
