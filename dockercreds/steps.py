from dockercreds.install_docker_credentials import InstallDockerCredentials

steps = {
    "install_docker_credentials": InstallDockerCredentials,
}
