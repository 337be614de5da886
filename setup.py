from setuptools import find_namespace_packages, setup

with open("requirements.txt") as f:
    install_reqs = f.read().strip().split("\n")

with open("test_requirements.txt") as f:
    test_reqs = f.read().strip().split("\n")

# Filter out comments/hashes
reqs = []
for req in install_reqs:
    if req.startswith("#") or req.startswith("    --hash="):
        continue
    reqs.append(str(req).rstrip(" \\"))

setup(
    name="cryptoadvance.derivation",
    version="0.1.0",
    description="Resolves derivation schemes and Electrum master public keys",
    author="cryptoadvance",
    license="MIT",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["cryptoadvance.*"]),
    python_requires=">=3.8",
    install_requires=reqs,
    extras_require={"test": [r for r in test_reqs if r and not r.startswith("#")]},
)
