"""
Orders — Permissions

Workflow actions for any authenticated user; the hard delete is
reserved to staff.

@file orders/permissions.py
"""

from rest_framework.permissions import BasePermission


class CanManageOrder(BasePermission):

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if view.action == 'destroy':
            return request.user.is_staff or request.user.is_superuser
        return True
