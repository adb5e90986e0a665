[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textdesk"
version = "0.1.0"
description = "Word counting, topic detection and extractive summaries, with a command-line client and admin tool for a text-processing server."
requires-python = ">=3.10"
dependencies = []
keywords = ["nlp", "text", "summarization", "naive-bayes", "tf-idf", "topic-classification"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
textdesk-client = "textdesk.client:main"
textdesk-admin = "textdesk.admin:main"

[tool.hatch.build.targets.wheel]
packages = ["textdesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
