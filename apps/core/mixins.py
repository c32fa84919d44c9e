"""
-------------------------------------------------------------------------
System: ERP Console (Electrical Contracting Administration)
Description: Reusable view mixins for looking up in-memory records and
             for the list-page search/filter pattern shared by every
             module.
-------------------------------------------------------------------------
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.http import Http404

from apps.core.exceptions import RecordNotFoundException
from apps.core.repository import MockRepository


class RecordMixin:
    """
    Mixin for views that operate on one record of a MockRepository.

    Attributes:
        repository: The repository holding the records.
        pk_url_kwarg: URL keyword carrying the record ID.
        context_object_name: Context name for the record.
    """

    repository: Optional[MockRepository] = None
    pk_url_kwarg: str = 'pk'
    context_object_name: str = 'object'

    def get_object(self):
        """
        Fetch the record named by the URL.

        Raises:
            Http404: If the record does not exist.
        """
        if getattr(self, '_object', None) is None:
            try:
                self._object = self.repository.get_or_raise(int(self.kwargs[self.pk_url_kwarg]))
            except RecordNotFoundException as exc:
                raise Http404(exc.message)
        return self._object

    def get_context_data(self, **kwargs) -> Dict[str, Any]:
        context = super().get_context_data(**kwargs)
        context[self.context_object_name] = self.get_object()
        return context


class SearchFilterMixin:
    """
    Mixin implementing the search box + dropdown filters on list pages.

    Attributes:
        search_fields: Record attributes matched case-insensitively
                       against the ``search`` query parameter.
        filter_fields: Mapping of query parameter -> record attribute for
                       exact-match dropdown filters; ``all``/``All``/empty
                       disables a filter.
    """

    search_fields: Sequence[str] = ()
    filter_fields: Dict[str, str] = {}

    def get_search_query(self) -> str:
        return self.request.GET.get('search', '').strip()

    def matches_search(self, record, query: str) -> bool:
        query = query.lower()
        for field_name in self.search_fields:
            value = getattr(record, field_name, None)
            if value and query in str(value).lower():
                return True
        return False

    def apply_filters(self, records: Iterable) -> List:
        query = self.get_search_query()
        active_filters = {
            attr: self.request.GET.get(param)
            for param, attr in self.filter_fields.items()
            if self.request.GET.get(param) not in (None, '', 'all', 'All')
        }

        filtered = []
        for record in records:
            if query and not self.matches_search(record, query):
                continue
            if any(str(getattr(record, attr)) != value for attr, value in active_filters.items()):
                continue
            filtered.append(record)
        return filtered

    def get_filter_context(self) -> Dict[str, Any]:
        context = {'search_query': self.get_search_query()}
        for param in self.filter_fields:
            context[f'{param}_filter'] = self.request.GET.get(param, 'all')
        return context
