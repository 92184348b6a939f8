from setuptools import find_packages, setup

deps = [
    "boto3",
    "click",
    "click-aliases",
    "fastapi",
    "pillow",
    "pydantic",
    "pydantic-settings",
    "requests",
    "requests-toolbelt",
    "starlette",
    "uvicorn",
]

test_deps = [
    "httpx",
    "pytest",
]

setup(
    name="variantio",
    version="0.1.0",
    script_name="setup.py",
    python_requires=">=3.8",
    zip_safe=False,
    install_requires=deps,
    extras_require={"test": test_deps},
    include_package_data=True,
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "vio=variantio.cli:cli",
            "variantio-create-buckets=variantio.dev_cli:main",
        ],
    },
)
