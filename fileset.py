import os.path
import typing


Items = typing.Union[None, str, typing.Iterable[typing.Optional[str]]]


class ItemSet(typing.Collection[str]):
    """ ordered set of paths without duplicates


    Items can be given one by one, as a list, or as a delimited string.
    >>> s = ItemSet('css/*.css, templates/**/*.twig')
    >>> s.add(['css/*.css', '', None]).add('images')
    <ItemSet ['css/*.css', 'templates/**/*.twig', 'images']>

    Paths are normalized before comparison.
    >>> 'images' in s.add('./images/')
    True
    >>> len(s)
    3

    >>> s.remove('css/*.css,images')
    <ItemSet ['templates/**/*.twig']>
    """

    def __init__(self, items: Items = None, delimiter: str = ',') -> None:
        self.delimiter = delimiter
        self._items: typing.List[str] = []

        self.add(items)

    def __repr__(self) -> str:
        return '<{} {}>'.format(self.__class__.__name__, self._items)

    def _split(self, items: Items) -> typing.Iterator[str]:
        if items is None:
            return

        if isinstance(items, str):
            items = items.split(self.delimiter)

        for item in items:
            if item is None:
                continue

            item = str(item).strip()
            if item:
                yield os.path.normpath(item)

    def add(self, items: Items) -> 'ItemSet':
        for item in self._split(items):
            if item not in self._items:
                self._items.append(item)

        return self

    def remove(self, items: Items) -> 'ItemSet':
        for item in self._split(items):
            if item in self._items:
                self._items.remove(item)

        return self

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, str):
            return False
        return os.path.normpath(item.strip()) in self._items

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class WatchFileSet(ItemSet):
    pass


class ImageDirectorySet(ItemSet):
    def patterns(self) -> typing.List[str]:
        """
        >>> ImageDirectorySet('images,files').patterns()
        ['images/*', 'files/*']
        """

        return [os.path.join(d, '*') for d in self]
