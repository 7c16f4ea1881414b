from setuptools import setup, find_packages

setup(
    name="byte_suffix_tree",
    version="0.1.0",
    description="Ukkonen's linear-time suffix tree construction over raw byte strings.",
    packages=find_packages(where='.', include=['byte_suffix_tree', 'byte_suffix_tree.*']),
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        'test': ['pytest'],
        # display_graphviz() imports graphviz lazily
        'viz': ['graphviz'],
        # benchmark.py at the repository root
        'benchmark': ['pandas', 'matplotlib'],
    },
    zip_safe=False
)
