import setuptools

setuptools.setup(
	name='tokenform',
	version='0.1.0',
	packages=[
		'tokenform',
		'tokenform.support',
		'tokenform.tree',
	],
	description='Bidirectional notations for lexer symbols and parse trees, for writing readable test fixtures',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	python_requires='>=3.9',
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Topic :: Software Development :: Testing",
		"Topic :: Software Development :: Compilers",
		"Development Status :: 3 - Alpha",
	],
)
