# sr_core/students/filters.py
from __future__ import annotations

import django_filters
from django.db.models import Q

from sr_core.students.models import Child


class StudentFilter(django_filters.FilterSet):
    """
    Roster filters. ``q`` searches through the ``primary_link`` relation, so
    the queryset must carry that FilteredRelation annotation.
    """
    status = django_filters.CharFilter(field_name="registration__status", lookup_expr="iexact")
    q = django_filters.CharFilter(method="filter_q")

    class Meta:
        model = Child
        fields = ["status", "q"]

    def filter_q(self, queryset, name, value):
        return queryset.filter(
            Q(first_name__icontains=value)
            | Q(last_name__icontains=value)
            | Q(primary_link__guardian__email__icontains=value)
        )
