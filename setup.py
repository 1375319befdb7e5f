# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="next-introspect",
    version="0.1.0",
    description="Analyze Next.js projects and export their routes as JSON, Markdown or TypeScript",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["next_introspect*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'next-introspect=next_introspect.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
