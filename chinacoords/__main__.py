"""Prints a sample BD-09 -> GCJ-02 conversion"""

from chinacoords.transform import provider_to_obfuscated


def main():
    lon, lat = provider_to_obfuscated(113.5739274927449, 34.82327621798387)
    print(f'{lon!r}, {lat!r}')


if __name__ == '__main__':
    main()
