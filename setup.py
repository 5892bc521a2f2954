import setuptools

setuptools.setup(
    name='materialdriver',
    description='Material point driver for partially prescribed stress and strain increments',
    packages=setuptools.find_packages(include=['materialdriver', 'materialdriver.*']),
    package_data={'materialdriver.helper_methods.test': ['*.yaml']},
    install_requires=['equinox',
                      'jax[cpu]',
                      'jaxtyping',
                      'matplotlib', # only used by the examples
                      'numpy',
                      'pyyaml',
                      'scipy'],
    extras_require={'test': ['pytest', 'pytest-cov', 'pytest-xdist']},
    python_requires='>=3.10',
    version='0.0.1',
    license='MIT'
)
