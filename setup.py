"""Setup script for the citation formatting service."""
from setuptools import setup, find_packages

setup(
    name="refcite",
    version="1.0.0",
    packages=find_packages(where="src") + ["ui"],
    package_dir={"": "src", "ui": "ui"},
    package_data={"refcite": ["styles/*.csl"]},
    install_requires=[
        "requests>=2.25.0",
        "python-docx>=0.8.11",
        "flask>=2.2.0",
        "werkzeug>=2.2.0",
        "markupsafe>=2.0.0",
        "flask-sqlalchemy>=3.0.0",
        "sqlalchemy>=1.4.0",
        "flask-login>=0.6.0",
        "flask-limiter>=3.0.0",
        "wtforms>=3.0.0",
        "itsdangerous>=2.0.0",
        "python-dotenv>=0.19.0",
        "citeproc-py>=0.6.0",
        "lxml>=4.6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    author="Stenford Ruvinga",
    author_email="stenford41@hotmail.com",
    description="Citation formatting service for a reference manager",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords="reference citation csl bibliography",
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: Flask",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Text Processing :: Markup",
    ],
)
