from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh.readlines() if line.strip()]

setup(
    name="seminar-post",
    version="1.0.0",
    author="Seminar Post",
    author_email="example@example.com",
    description="Generate a Socratic seminar meetup post from GitHub issue comments",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/seminar-post",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.8',
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'seminar-post=seminar_post.cli:main',
        ],
    },
)
