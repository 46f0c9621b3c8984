# setup.py
from setuptools import setup, find_packages

setup(
    name="namedlog",
    version="0.1.0",
    description="Named, leveled log streams routed to size-capped, rotated files",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Encuentra automáticamente la carpeta 'namedlog'
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
