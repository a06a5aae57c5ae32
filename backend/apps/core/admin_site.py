# apps/core/admin_site.py

from django.contrib.admin import AdminSite


class HostelAdminSite(AdminSite):
    """
    Admin site for hostel operations staff.
    """
    site_header = "Sky Hostel Administration"
    site_title = "Sky Hostel Admin"
    index_title = "Registrations and Payments"

    def has_permission(self, request):
        """
        User must be active and staff.
        """
        return request.user.is_active and request.user.is_staff


custom_admin_site = HostelAdminSite(name='custom_admin')
