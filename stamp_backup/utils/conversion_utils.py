_BYTE_UNITS = ['B', 'KiB', 'MiB', 'GiB', 'TiB']


def byte_count_to_str(value: int) -> str:
	number = float(value)
	for unit in _BYTE_UNITS:
		if abs(number) < 1024 or unit == _BYTE_UNITS[-1]:
			if unit == 'B':
				return '{}{}'.format(int(number), unit)
			return '{:.2f}{}'.format(number, unit)
		number /= 1024
	raise AssertionError()
